from flask_mail import Mail
from flask_cors import CORS
from flask_limiter import Limiter
from .services.request_utils import get_client_ip


mail = Mail()
cors = CORS()
# Sin límites por defecto; solo los explícitos por endpoint.
# El almacenamiento se toma de RATELIMIT_STORAGE_URI en app.config.
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[],
)
