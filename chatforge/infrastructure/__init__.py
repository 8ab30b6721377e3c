"""
Infrastructure - Implementations concretes (modeles LLM).
"""
