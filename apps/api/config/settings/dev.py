from .base import *

DEBUG = True
ALLOWED_HOSTS = ["*"]

LOGGING["root"]["level"] = "DEBUG"
