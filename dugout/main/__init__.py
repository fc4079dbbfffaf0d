from flask import Blueprint

bp = Blueprint('main', __name__)

from dugout.main import routes
