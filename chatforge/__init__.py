"""
ChatForge AI - coeur de la plateforme (configuration, generation, templates).
"""
