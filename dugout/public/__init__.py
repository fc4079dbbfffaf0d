"""
Public blueprint for pages shared with players by link: the read-only
tournament view and the waiver signature page.
"""

from flask import Blueprint

bp = Blueprint('public', __name__)

from dugout.public import routes
