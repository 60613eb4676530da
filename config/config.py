"""Settings shared by every environment.

Environment modules start from these values and override what differs.
"""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hostel_mess_db"),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Billing policy
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")
LEAVE_MIN_NOTICE_DAYS = int(os.getenv("LEAVE_MIN_NOTICE_DAYS", "1"))
# "absent": unapproved leave days are not billed as present until approved or rejected
PENDING_LEAVE_POLICY = os.getenv("PENDING_LEAVE_POLICY", "absent").lower()
