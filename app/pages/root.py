"""Root landing page with links to the intake and admin API."""

from html import escape


def render_root_page(app_name: str, app_version: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    version = escape(app_version)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            padding: 2rem 1rem;
            background: #111;
            color: #ddd;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ color: #fff; font-weight: 600; margin-bottom: 0.25rem; }}
        .version {{ color: #888; font-size: 0.9rem; }}
        ul {{ padding-left: 1.2rem; line-height: 1.8; }}
        a {{ color: #9cf; }}
        code {{ font-family: ui-monospace, monospace; color: #fc9; }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{name}</h1>
        <div class="version">v{version}</div>
        <p>Photo intake by access token, with an audit view for administrators.</p>
        <ul>
            <li><a href="/docs">API documentation (Swagger)</a></li>
            <li><a href="/redoc">API reference (ReDoc)</a></li>
            <li><code>GET /api/v1/intake/categories</code> lists intake categories</li>
            <li><code>POST /api/v1/intake</code> uploads a batch for a token</li>
            <li><code>GET /api/v1/health</code> liveness</li>
        </ul>
    </div>
</body>
</html>
"""
