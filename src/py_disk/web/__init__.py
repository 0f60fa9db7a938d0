"""JSON web API for the disk scheduling simulator.

This package provides a Flask application that exposes the scheduler
engine over HTTP, for a browser front end to draw charts from.  It is
an **optional** extra — install with::

    pip install py-disk[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``GET /api/algorithms`` — the supported algorithm tags.
- ``POST /api/simulate`` — run a scenario and return its trace as JSON.
"""
