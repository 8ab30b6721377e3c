from chatforge.templates import generate_embed_scripts

API_KEY = "cfai_0123456789abcdef0123456789abcdef"


def test_all_variants_embed_key_and_platform_url():
    scripts = generate_embed_scripts(API_KEY, "https://app.chatforge.test/")

    for snippet in (scripts.html, scripts.react, scripts.nextjs):
        assert API_KEY in snippet
        assert "https://app.chatforge.test" in snippet
        assert "chatforge.test//" not in snippet


def test_html_variant_is_a_script_tag():
    html = generate_embed_scripts(API_KEY, "https://app.chatforge.test").html

    assert html.startswith("<!-- ChatForge AI Embed Start -->")
    assert "<script>" in html
    assert "/api/chat/config/" in html


def test_framework_variants_export_a_component():
    scripts = generate_embed_scripts(API_KEY, "https://app.chatforge.test")

    assert "useEffect" in scripts.react
    assert "export default Chatbot;" in scripts.react
    assert "'use client';" in scripts.nextjs
    assert "next/script" in scripts.nextjs


def test_script_is_guarded_against_double_injection():
    html = generate_embed_scripts(API_KEY, "https://app.chatforge.test").html

    assert "document.getElementById('chatforge-trigger')" in html
