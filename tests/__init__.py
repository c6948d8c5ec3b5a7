import os

# Cheap bcrypt for tests; must be set before conference settings are first loaded.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("EMAIL_ENABLED", "false")
