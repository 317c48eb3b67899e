from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

limiter = Limiter(
    get_remote_address,
    default_limits=["200 per day", "50 per hour"]  # global limits
)
csrf = CSRFProtect()
