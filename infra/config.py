import os
import secrets


def get_secret_key() -> str:
    """Return the application's SECRET_KEY.
    Priority: environment variable, then instance file, else generate and persist."""
    # 1. Env var has priority
    env_key = os.getenv("SECRET_KEY")
    if env_key:
        return env_key

    # 2. Instance path file
    instance_path = os.getenv("INSTANCE_PATH", os.path.join(os.getcwd(), "instance"))
    os.makedirs(instance_path, exist_ok=True)
    key_path = os.path.join(instance_path, "secret_key")

    if os.path.exists(key_path):
        with open(key_path, "r") as f:
            return f.read().strip()

    # 3. Generate and persist
    new_key = secrets.token_hex(32)
    with open(key_path, "w") as f:
        f.write(new_key)
    try:
        os.chmod(key_path, 0o600)
    except OSError:
        pass
    return new_key


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def get_config() -> dict:
    """Return app configuration settings."""
    return {
        "DEBUG": os.getenv("DEBUG", "false").lower() == "true",
        "SECRET_KEY": get_secret_key(),
        "MAX_CONTENT_LENGTH": _get_int("MAX_UPLOAD_MB", 16) * 1024 * 1024,
        "PREVIEW_ROWS": _get_int("PREVIEW_ROWS", 5),
        "CHART_ROWS": _get_int("CHART_ROWS", 50),
    }
