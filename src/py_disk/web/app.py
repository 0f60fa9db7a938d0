"""Flask application factory for the py-disk JSON API.

The ``create_app`` function returns a Flask app with two endpoints:

- ``GET /api/algorithms`` — list the algorithm tags the engine accepts.
- ``POST /api/simulate`` — run one scenario and return its trace.

Every simulation is run from scratch on a fresh request list, so the
app holds no state between calls.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, request

from py_disk.algorithms import Algorithm
from py_disk.config import ConfigError, Scenario
from py_disk.logging import Logger

_HTTP_BAD_REQUEST = 400


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/api/algorithms")
    def algorithms() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the supported algorithm tags."""
        return jsonify({"algorithms": [str(a) for a in Algorithm]})

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a scenario and return its trace as JSON.

        Expects a scenario JSON body (see ``py_disk.config``).

        Returns:
            JSON with ``sequence``, ``totalTracks``, ``steps``,
            ``totalTime`` and the simulation ``log``.

        """
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({"error": "Missing JSON scenario body"}), _HTTP_BAD_REQUEST

        try:
            scenario = Scenario.from_mapping(data)
        except ConfigError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        logger = Logger()
        result = scenario.run(logger=logger)

        payload = result.to_dict()
        payload["log"] = logger.lines()
        return jsonify(payload)

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-disk-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
