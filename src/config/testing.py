from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

TAX_BRACKETS = "0:0.15,5000:0.20,10000:0.27,50000:0.35"
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
