from flask import Blueprint

bp = Blueprint('parks', __name__, url_prefix='/parks')

from dugout.parks import routes
