"""
Templates du code d'integration (embed) des chatbots.

Le script est autonome: il injecte un bouton flottant et charge a la
demande une iframe pointant vers la page de chat du bot. Il est genere
cote serveur comme du texte, jamais execute cote serveur.
"""

from dataclasses import dataclass

from jinja2 import Environment

_env = Environment(autoescape=False, keep_trailing_newline=True)

WIDGET_JS = _env.from_string("""(function() {
    if (document.getElementById('chatforge-trigger')) {
        return;
    }

    const API_KEY = {{ api_key|tojson }};
    const APP_URL = {{ app_url|tojson }};

    const style = document.createElement('style');
    style.id = 'chatforge-style';
    style.innerHTML = `
        #chatforge-trigger, #chatforge-iframe-container { transition: all 0.3s ease-in-out; font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; }
        #chatforge-trigger { position: fixed; bottom: 20px; right: 20px; width: 60px; height: 60px; border-radius: 50%; border: none; color: white; background-color: #007BFF; display: flex; align-items: center; justify-content: center; cursor: pointer; box-shadow: 0 4px 12px rgba(0,0,0,0.15); z-index: 9999998; transform: scale(1); }
        #chatforge-trigger:hover { transform: scale(1.1); }
        #chatforge-trigger svg { width: 28px; height: 28px; position: absolute; transition: opacity 0.2s, transform 0.2s; }
        #chatforge-trigger .icon-close { opacity: 0; transform: rotate(-90deg); }
        #chatforge-trigger.open .icon-open { opacity: 0; transform: rotate(90deg); }
        #chatforge-trigger.open .icon-close { opacity: 1; transform: rotate(0deg); }
        #chatforge-iframe-container { position: fixed; bottom: 90px; right: 20px; width: min(calc(100vw - 40px), 380px); height: min(80vh, 700px); box-shadow: 0 8px 24px rgba(0,0,0,0.15); border-radius: 16px; overflow: hidden; z-index: 9999999; transform-origin: bottom right; opacity: 0; transform: scale(0.9); pointer-events: none; border: 1px solid #e5e7eb; background: #fff; }
        #chatforge-iframe-container.open { opacity: 1; transform: scale(1); pointer-events: all; }
        #chatforge-iframe { width: 100%; height: 100%; border: none; opacity: 0; transition: opacity 0.3s ease-in-out; }
        #chatforge-iframe.loaded { opacity: 1; }
        .chatforge-loader { position: absolute; top: 0; left: 0; right: 0; bottom: 0; display: flex; align-items: center; justify-content: center; color: #6b7280; font-size: 14px; transition: opacity 0.3s ease-in-out; }
    `;
    document.head.appendChild(style);

    const trigger = document.createElement('button');
    trigger.id = 'chatforge-trigger';
    trigger.setAttribute('aria-label', 'Open chat');
    trigger.innerHTML = '<svg class="icon-open" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"><path d="M21 15a2 2 0 0 1-2 2H7l-4 4V5a2 2 0 0 1 2-2h14a2 2 0 0 1 2 2z"></path></svg>'
        + '<svg class="icon-close" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"><line x1="18" y1="6" x2="6" y2="18"></line><line x1="6" y1="6" x2="18" y2="18"></line></svg>';

    const container = document.createElement('div');
    container.id = 'chatforge-iframe-container';

    const loader = document.createElement('div');
    loader.className = 'chatforge-loader';
    loader.textContent = 'Loading Support Bot...';
    container.appendChild(loader);

    document.body.appendChild(trigger);
    document.body.appendChild(container);

    fetch(APP_URL + '/api/chat/config/' + API_KEY)
        .then(function(res) { return res.json(); })
        .then(function(config) {
            if (config.color) {
                trigger.style.backgroundColor = config.color;
            }
            if (config.name) {
                loader.textContent = 'Loading ' + config.name + '...';
            }
        })
        .catch(console.error);

    let isOpen = false;
    let iframeLoaded = false;

    function createIframe() {
        if (iframeLoaded) return;
        iframeLoaded = true;
        const iframe = document.createElement('iframe');
        iframe.id = 'chatforge-iframe';
        iframe.src = APP_URL + '/gen/ai/cfai/' + API_KEY;
        iframe.setAttribute('allow', 'clipboard-write');
        iframe.onload = function() {
            iframe.classList.add('loaded');
            loader.style.opacity = '0';
        };
        container.appendChild(iframe);
    }

    function toggleChat() {
        isOpen = !isOpen;
        trigger.classList.toggle('open');
        trigger.setAttribute('aria-label', isOpen ? 'Close chat' : 'Open chat');
        if (isOpen) {
            createIframe();
        }
        container.classList.toggle('open');
    }

    trigger.addEventListener('click', toggleChat);
})();""")

HTML_SNIPPET = _env.from_string("""<!-- ChatForge AI Embed Start -->
<script>
{{ widget_js }}
</script>
<!-- ChatForge AI Embed End -->
""")

REACT_SNIPPET = _env.from_string("""import React, { useEffect } from 'react';

// You can find your API key on your ChatForge dashboard.
const WIDGET_SCRIPT = {{ widget_js|tojson }};

const Chatbot = () => {
  useEffect(() => {
    const scriptId = 'chatforge-embed-script';
    if (document.getElementById(scriptId)) return;

    const script = document.createElement('script');
    script.id = scriptId;
    script.innerHTML = WIDGET_SCRIPT;
    document.body.appendChild(script);

    return () => {
      ['chatforge-embed-script', 'chatforge-trigger', 'chatforge-iframe-container', 'chatforge-style']
        .forEach((id) => {
          const el = document.getElementById(id);
          if (el) el.remove();
        });
    };
  }, []);

  return null;
};

export default Chatbot;
""")

NEXTJS_SNIPPET = _env.from_string("""'use client';
import Script from 'next/script';

// You can find your API key on your ChatForge dashboard.
const WIDGET_SCRIPT = {{ widget_js|tojson }};

const Chatbot = () => {
  return (
    <Script id="chatforge-embed-script" strategy="afterInteractive">
      {WIDGET_SCRIPT}
    </Script>
  );
};

export default Chatbot;
""")


@dataclass(frozen=True)
class EmbedScripts:
    """Les trois variantes du code d'integration d'un chatbot."""

    html: str
    react: str
    nextjs: str


def generate_embed_scripts(api_key: str, app_url: str) -> EmbedScripts:
    """
    Genere le code d'integration d'un chatbot.

    Args:
        api_key: API key du chatbot
        app_url: URL publique de la plateforme (sans slash final)

    Returns:
        EmbedScripts avec les variantes HTML, React et Next.js
    """
    widget_js = WIDGET_JS.render(api_key=api_key, app_url=app_url.rstrip("/"))
    return EmbedScripts(
        html=HTML_SNIPPET.render(widget_js=widget_js),
        react=REACT_SNIPPET.render(widget_js=widget_js),
        nextjs=NEXTJS_SNIPPET.render(widget_js=widget_js),
    )
