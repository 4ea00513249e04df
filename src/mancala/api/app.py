import logging

from flask import Flask, jsonify, Response
from flask_smorest import Api
from flask_cors import CORS

from mancala import config
from mancala.api.routes import bp
from mancala.utils.exceptions import MancalaError

logger = logging.getLogger(__name__)

SWAGGER_CSS = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/swagger-ui.css"
SWAGGER_BUNDLE = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/swagger-ui-bundle.js"
SWAGGER_STANDALONE = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/swagger-ui-standalone-preset.js"

def create_app(overrides=None):
    app = Flask(__name__)

    # smorest OpenAPI basics
    app.config["API_TITLE"] = "Mancala (Flask)"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.3"
    if overrides:
        app.config.update(overrides)

    api = Api(app)
    api.register_blueprint(bp)

    # the browser board calls /api/* from its own origin
    CORS(app, resources={r"/api/*": {"origins": config.cors_origins()}})

    @app.errorhandler(MancalaError)
    def mancala_error(e):
        logger.warning("rejected request: %s", e)
        return jsonify({"code": 400, "status": "Bad Request", "message": str(e)}), 400

    # --- Manual docs: /openapi.json + /apidocs --------------------------------
    @app.get("/openapi.json")
    def openapi_json():
        return jsonify(api.spec.to_dict())

    @app.get("/apidocs")
    def apidocs():
        html = f"""
<!doctype html>
<html>
  <head>
    <meta charset="utf-8"/>
    <title>Mancala API Docs</title>
    <link rel="stylesheet" href="{SWAGGER_CSS}">
    <style>body {{ margin:0; background:#fafafa; }}</style>
  </head>
  <body>
    <div id="swagger-ui"></div>
    <script src="{SWAGGER_BUNDLE}"></script>
    <script src="{SWAGGER_STANDALONE}"></script>
    <script>
      window.onload = () => {{
        SwaggerUIBundle({{
          url: "/openapi.json",
          dom_id: "#swagger-ui",
          presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
          layout: "StandaloneLayout"
        }});
      }};
    </script>
  </body>
</html>"""
        return Response(html, mimetype="text/html")
    # --------------------------------------------------------------------------

    return app

def main():
    config.setup_logging()
    create_app().run(host=config.HOST, port=config.PORT, debug=False)

if __name__ == "__main__":
    main()
