import os

from flask import redirect, url_for, current_app, abort, send_file

from dugout.main import bp
from dugout.storage import get_storage_path
from dugout.audit import audit_log_security_event


@bp.route('/')
@bp.route('/index')
def index():
    return redirect(url_for('tournaments.list_tournaments'))


@bp.route('/files/<path:key>')
def serve_file(key):
    """
    Serve a document, signature or tournament image from the file store
    """
    file_path = get_storage_path(key)
    if not file_path:
        audit_log_security_event('INVALID_PATH', f'Rejected file request: {key}')
        abort(404)

    if not os.path.exists(file_path):
        current_app.logger.warning(f"Stored file not found: {key}")
        abort(404)

    return send_file(file_path)
