"""Root landing page for the Event Overview service."""

from html import escape


def render_root_page(app_name: str, time_range: str = "") -> str:
    """Return HTML for the root landing page (links to the chart API and docs)."""
    name = escape(app_name)
    selected = escape(time_range) if time_range else "all time"
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
            background: #111;
            color: #ddd;
            padding: 2rem 1rem;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ color: #fff; font-weight: 600; margin-bottom: 0.25rem; }}
        .tagline {{ color: #888; margin-top: 0; }}
        .card {{
            background: #181818;
            border: 1px solid #262626;
            padding: 1.25rem 1.5rem;
            margin: 1.5rem 0;
        }}
        code {{ font-family: ui-monospace, monospace; color: #bbb; }}
        a {{ color: #9cf; }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{name}</h1>
        <p class="tagline">Events by Type Over Time</p>
        <section class="card">
            <p>Selected time range: <code>{selected}</code></p>
            <p>Chart: <a href="/api/v1/overview/chart"><code>GET /api/v1/overview/chart</code></a></p>
            <p>Live updates: <code>WS /api/v1/ws</code></p>
            <p>Refresh: <code>POST /api/v1/overview/refresh</code></p>
            <p><a href="/docs">API docs (Swagger)</a> · <a href="/redoc">ReDoc</a></p>
        </section>
    </div>
</body>
</html>
""".strip()
