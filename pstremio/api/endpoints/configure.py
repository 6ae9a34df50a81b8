"""
Configuration Endpoint
Serves the source picker page and the source list
"""
import html
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, RedirectResponse
from pstremio.core.config import settings
from pstremio.services.providers import get_provider_engine

router = APIRouter()


@router.get("/api/sources")
async def list_sources():
    """Ids of all source scrapers, highest rank first"""
    engine = get_provider_engine()
    return [source.id for source in await engine.list_sources()]


@router.get("/configure")
@router.get("/{source}/configure")
async def configure_redirect():
    return RedirectResponse("/")


@router.get("/", response_class=HTMLResponse)
async def configure_page():
    """Serve the source picker"""
    engine = get_provider_engine()
    sources = await engine.list_sources()
    
    base_url = str(settings.BASE_URL).rstrip('/')
    host = base_url.split("://", 1)[-1]
    
    rows = "\n".join(
        f"""        <li>
            <span>{html.escape(source.name)}</span>
            <a href="stremio://{host}/{html.escape(source.id)}/manifest.json">Install</a>
            <code>{base_url}/{html.escape(source.id)}/manifest.json</code>
        </li>"""
        for source in sources
    )
    
    html_content = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__ADDON_NAME__ - Sources</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            display: flex;
            justify-content: center;
            align-items: center;
            padding: 20px;
        }
        .container {
            background: white;
            border-radius: 16px;
            box-shadow: 0 20px 60px rgba(0,0,0,0.3);
            max-width: 720px;
            width: 100%;
            padding: 40px;
        }
        h1 { color: #333; margin-bottom: 10px; font-size: 28px; }
        .subtitle { color: #666; margin-bottom: 30px; font-size: 14px; }
        ul { list-style: none; }
        li {
            display: grid;
            grid-template-columns: 1fr auto;
            gap: 6px 12px;
            padding: 12px 0;
            border-bottom: 1px solid #e0e0e0;
        }
        li code { grid-column: 1 / -1; color: #888; font-size: 12px; word-break: break-all; }
        a {
            background: #667eea;
            color: white;
            padding: 6px 14px;
            border-radius: 8px;
            text-decoration: none;
            font-size: 14px;
        }
    </style>
</head>
<body>
    <div class="container">
        <h1>__ADDON_NAME__</h1>
        <p class="subtitle">Each source installs as its own stream addon.</p>
        <ul>
__SOURCES__
        </ul>
    </div>
</body>
</html>
    """
    
    html_content = html_content.replace("__ADDON_NAME__", html.escape(settings.ADDON_NAME))
    html_content = html_content.replace("__SOURCES__", rows)
    
    return html_content
