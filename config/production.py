import os

from config.config import CURRENCY_SYMBOL, LEAVE_MIN_NOTICE_DAYS, LOG_LEVEL, PENDING_LEAVE_POLICY, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
