# TaskFlow: projects, a three-column task board, and its ordering/filter/stats core
#
# Components:
#   constants.py   - Status/priority sets, labels, column order, colour palette
#   errors.py      - Error taxonomy and the Result type
#   due_dates.py   - Date-only parsing and due-date buckets
#   ordering.py    - Order assignment within a (project, status) column
#   filters.py     - Search/priority filtering and column partitioning
#   stats.py       - Counts, progress percentage, board metrics
#   models.py      - Flask-SQLAlchemy models and serializers
#   store.py       - Record store over the models
#   coordinator.py - Validation, normalization and persistence of mutations
#   app.py         - Flask JSON API
#   client.py      - requests client for the JSON API
#   board.py       - Client-side board session with observers
#   seed.py        - Demo data and the `flask seed` command
from .app import create_app

__all__ = ["create_app"]
