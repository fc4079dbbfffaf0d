from flask import render_template, request, jsonify
from dugout import db


def _wants_json():
    return request.path.startswith('/api/') or request.is_json


def register_error_handlers(app):
    """Register error handlers with the Flask application"""

    @app.errorhandler(404)
    def not_found_error(error):
        if _wants_json():
            return jsonify({'success': False, 'error': 'Not found'}), 404
        return render_template('404.html'), 404

    @app.errorhandler(413)
    def too_large_error(error):
        if _wants_json():
            return jsonify({'success': False, 'error': 'File too large'}), 413
        return render_template('413.html'), 413

    @app.errorhandler(429)
    def rate_limited_error(error):
        return render_template('429.html'), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        if _wants_json():
            return jsonify({'success': False, 'error': 'Internal server error'}), 500
        return render_template('500.html'), 500
