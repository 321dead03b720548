import argparse

from . import config
from .app import coordinator, create_app
from .seed import seed_demo_data


def main(argv=None):
    parser = argparse.ArgumentParser(description="TaskFlow server")
    parser.add_argument("--host", default="127.0.0.1",
                        help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--db", help="SQLAlchemy database URI (overrides TASKFLOW_DB)")
    parser.add_argument("--seed", action="store_true", help="Load demo data into an empty database")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    app = create_app({"SQLALCHEMY_DATABASE_URI": args.db} if args.db else None)
    port = args.port or config.PORT

    if args.seed:
        with app.app_context():
            seed_demo_data(coordinator())

    app.logger.info(f"Starting TaskFlow on {args.host}:{port}")
    app.run(host=args.host, port=port, debug=args.debug, use_reloader=False)


if __name__ == "__main__":
    main()
