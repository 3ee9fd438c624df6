import os
from pathlib import Path

import uvicorn


def _default_questions_dir() -> Path:
    return Path(os.environ.get("QUESTIONS_DIR", Path.cwd() / "data" / "questions"))


if __name__ == "__main__":
    os.environ.setdefault("QUESTIONS_DIR", str(_default_questions_dir()))

    from api.app import app

    uvicorn.run(app, host="127.0.0.1", port=8000)
