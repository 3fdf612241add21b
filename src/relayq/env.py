import os
import typing
from pathlib import Path

from appdirs import user_data_dir


class EnvManager:
    """Hands CLI options to the app uvicorn imports in its worker processes

    On enter the options are written to a file in the user data directory,
    on exit the file is removed. get_environ overlays the file on os.environ.
    """

    prefix = "RELAYQ_"
    env_file = Path(user_data_dir("relayq")) / "serve.env"

    def __init__(self, **env_vars):
        unknown = sorted(key for key in env_vars if not key.startswith(self.prefix))
        if unknown:
            raise ValueError(f"Environment variables must start with {self.prefix}: {', '.join(unknown)}")
        self.vars = {key: str(val) for key, val in env_vars.items() if val is not None}

    def __enter__(self):
        self.env_file.parent.mkdir(parents=True, exist_ok=True)
        self.env_file.write_text("".join(f"{key}={val}\n" for key, val in self.vars.items()))
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.clear()

    @classmethod
    def clear(cls) -> None:
        try:
            cls.env_file.unlink()
        except FileNotFoundError:
            pass

    @classmethod
    def read(cls) -> typing.Dict[str, str]:
        try:
            text = cls.env_file.read_text()
        except FileNotFoundError:
            return {}

        values = {}
        for row in text.splitlines():
            if "=" in row:
                key, value = row.split("=", 1)
                values[key.strip()] = value.strip()
        return values

    @classmethod
    def get_environ(cls) -> typing.Dict[str, str]:
        return {**os.environ, **cls.read()}
