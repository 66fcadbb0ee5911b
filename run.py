from comicshare import create_app, db, notifications
from comicshare.store import ensure_schema


app = create_app()


@app.cli.command("init-db")
def init_db():
    ensure_schema()


@app.cli.command("drop-db")
def drop_db():
    db.drop_all()


@app.cli.command("reset-db")
def reset_db():
    db.drop_all()
    ensure_schema()


if __name__ == "__main__":
    try:
        app.run(host="0.0.0.0", port=3000)
    finally:
        notifications.join(timeout=10, app=app)
