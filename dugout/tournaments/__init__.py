"""
Tournaments blueprint.

Covers the tournament list and calendar, the tournament detail page
(invitations, RSVP status, payments, documents, lodging) and the roster
exports generated from it.
"""

from flask import Blueprint

bp = Blueprint('tournaments', __name__, url_prefix='/tournaments')

from dugout.tournaments import routes
