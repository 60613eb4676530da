from config.config import CURRENCY_SYMBOL, LEAVE_MIN_NOTICE_DAYS, PENDING_LEAVE_POLICY, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
