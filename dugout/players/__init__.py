"""
Players blueprint: the team roster.

Provides listing with search/gender/jersey filters and column sorting,
player create/edit/delete, and CSV export of the filtered list.
"""

from flask import Blueprint

bp = Blueprint('players', __name__, url_prefix='/players')

from dugout.players import routes
