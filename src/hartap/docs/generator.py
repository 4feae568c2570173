"""
Static HTML documentation generator.

Writes a Swagger UI page, a ReDoc page and a landing page that all point at
the generated OpenAPI document.
"""

import html
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger("hartap.docs")

DEFAULT_SPEC_URL = './openapi/openapi.yaml'
DEFAULT_DOCS_TITLE = 'Unofficial API Reference'

SWAGGER_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Swagger UI - {{TITLE}}</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
  <style>
    html { box-sizing: border-box; overflow-y: scroll; }
    *, *:before, *:after { box-sizing: inherit; }
    body { margin: 0; background: #fafafa; }
    .swagger-ui .topbar { display: none; }
  </style>
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-standalone-preset.js"></script>
  <script>
    window.onload = () => {
      window.ui = SwaggerUIBundle({
        url: "{{SPEC_URL}}",
        dom_id: "#swagger-ui",
        deepLinking: true,
        presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
        plugins: [SwaggerUIBundle.plugins.DownloadUrl],
        layout: "StandaloneLayout"
      });
    };
  </script>
</body>
</html>
"""

REDOC_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>ReDoc - {{TITLE}}</title>
  <style>body { margin: 0; }</style>
</head>
<body>
  <div id="redoc-container">Loading...</div>
  <script src="https://cdn.redoc.ly/redoc/latest/bundles/redoc.standalone.js"></script>
  <script>
    Redoc.init('{{SPEC_URL}}', {
      scrollYOffset: 0,
      expandResponses: '200,201'
    }, document.getElementById('redoc-container'));
  </script>
</body>
</html>
"""

INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{TITLE}}</title>
  <style>
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      background: #f1f5f9;
      min-height: 100vh;
      display: flex;
      align-items: center;
      justify-content: center;
    }
    .container {
      background: white;
      padding: 3rem;
      border-radius: 1rem;
      box-shadow: 0 10px 25px rgba(0, 0, 0, 0.1);
      max-width: 600px;
      width: 90%;
    }
    h1 { color: #1a202c; margin-bottom: 0.5rem; font-size: 2rem; }
    .subtitle { color: #718096; margin-bottom: 2rem; }
    .badge {
      display: inline-block;
      background: #fef3c7;
      color: #92400e;
      padding: 0.25rem 0.75rem;
      border-radius: 9999px;
      font-size: 0.75rem;
      font-weight: 600;
      margin-bottom: 1.5rem;
    }
    .links { display: flex; gap: 1rem; flex-wrap: wrap; }
    a {
      display: inline-flex;
      padding: 0.75rem 1.5rem;
      border-radius: 0.5rem;
      text-decoration: none;
      font-weight: 500;
    }
    .swagger { background: #85ea2d; color: #173647; }
    .redoc { background: #32329f; color: white; }
    .spec { background: #e2e8f0; color: #475569; }
    .footer {
      margin-top: 2rem;
      padding-top: 1.5rem;
      border-top: 1px solid #e2e8f0;
      color: #94a3b8;
      font-size: 0.875rem;
    }
  </style>
</head>
<body>
  <div class="container">
    <span class="badge">Unofficial</span>
    <h1>{{TITLE}}</h1>
    <p class="subtitle">Reference derived from observed traffic</p>
    <div class="links">
      <a href="swagger.html" class="swagger">Swagger UI</a>
      <a href="redoc.html" class="redoc">ReDoc</a>
      <a href="{{SPEC_URL}}" class="spec">OpenAPI Spec</a>
    </div>
    <p class="footer">
      Generated from HAR files. For research and interoperability purposes only.
    </p>
  </div>
</body>
</html>
"""

DOC_PAGES = {
    'swagger.html': SWAGGER_TEMPLATE,
    'redoc.html': REDOC_TEMPLATE,
    'index.html': INDEX_TEMPLATE,
}


def render_template(template: str, spec_url: str, title: str = DEFAULT_DOCS_TITLE) -> str:
    """Fill the {{SPEC_URL}} and {{TITLE}} placeholders."""
    return (
        template
        .replace('{{SPEC_URL}}', html.escape(spec_url, quote=True))
        .replace('{{TITLE}}', html.escape(title))
    )


def generate_docs(
    output_dir: str,
    spec_url: str = DEFAULT_SPEC_URL,
    title: str = DEFAULT_DOCS_TITLE
) -> Dict[str, Path]:
    """
    Write the HTML documentation pages.

    Args:
        output_dir: Directory to write into (created if missing)
        spec_url: URL of the OpenAPI document, relative to output_dir
        title: Page title

    Returns:
        Mapping of page name to written file
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written = {}
    for name, template in DOC_PAGES.items():
        page = out / name
        page.write_text(render_template(template, spec_url, title), encoding='utf-8')
        written[name] = page
        logger.debug(f"Wrote {page}")

    logger.info(f"Generated {len(written)} documentation page(s) in {out}")
    return written
