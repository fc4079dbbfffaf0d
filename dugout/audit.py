"""
Audit Logging System for Database Operations

Every change to team data (create, update, delete) and every stored file is
written to ``instance/logs/audit.log`` with a timestamp, the requesting client
and a description of the operation.

Usage:
    from dugout.audit import audit_log_create, audit_log_update, audit_log_delete

    # For new records
    audit_log_create('Player', player.id, f'Created player: {player.full_name}')

    # For updates
    audit_log_update('Tournament', tournament.id, 'Archived tournament', {'archived': 'False'})

    # For deletions
    audit_log_delete('Park', park_id, f'Deleted park: {name}')
"""

import logging
import os
from typing import Optional, Dict, Any, Union
from flask import current_app, request, has_request_context


def setup_audit_logger():
    """Setup and configure the audit logger with proper formatting and file handling."""
    audit_logger = logging.getLogger('audit')
    audit_logger.setLevel(logging.INFO)

    # Prevent duplicate log entries
    if audit_logger.hasHandlers():
        return audit_logger

    log_dir = os.path.join(current_app.instance_path, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, 'audit.log')
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(formatter)
    audit_logger.addHandler(file_handler)

    # Prevent propagation to root logger
    audit_logger.propagate = False

    return audit_logger


def get_current_client_info() -> str:
    """Describe who made the request for audit logging."""
    if has_request_context():
        return request.headers.get('X-Forwarded-For', request.remote_addr) or 'UNKNOWN'
    return "SYSTEM"


def _format_extra(data: Optional[Dict[str, Any]]) -> str:
    if not data:
        return ''
    return ' | ' + ', '.join(f'{key}={value}' for key, value in data.items())


def audit_log_create(model_name: str, record_id: Union[int, str], description: str,
                     additional_data: Optional[Dict[str, Any]] = None):
    """
    Log database record creation.

    Args:
        model_name: Name of the database model (e.g., 'Player', 'Tournament')
        record_id: ID of the created record
        description: Human-readable description of the operation
        additional_data: Optional additional data to include in the log
    """
    try:
        logger = setup_audit_logger()
        client = get_current_client_info()

        logger.info(f"CREATE | {model_name} | ID: {record_id} | Client: {client} | "
                    f"{description}{_format_extra(additional_data)}")
    except Exception as e:
        # Audit logging must not break the request; record the failure in the app log
        current_app.logger.error(f"AUDIT_FAILURE | Failed to log CREATE for {model_name} ID {record_id}: {str(e)}")


def audit_log_update(model_name: str, record_id: Union[int, str], description: str,
                     changes: Optional[Dict[str, Any]] = None,
                     additional_data: Optional[Dict[str, Any]] = None):
    """
    Log database record updates.

    Args:
        model_name: Name of the database model
        record_id: ID of the updated record
        description: Human-readable description of the operation
        changes: Optional dictionary of field changes {'field': 'old_value'}
        additional_data: Optional additional data to include in the log
    """
    logger = setup_audit_logger()
    client = get_current_client_info()

    log_message = f"UPDATE | {model_name} | ID: {record_id} | Client: {client} | {description}"
    if changes:
        log_message += ' | Changed: ' + ', '.join(sorted(changes.keys()))
    logger.info(log_message + _format_extra(additional_data))


def audit_log_delete(model_name: str, record_id: Union[int, str], description: str,
                     additional_data: Optional[Dict[str, Any]] = None):
    """
    Log database record deletion.

    Args:
        model_name: Name of the database model
        record_id: ID of the deleted record
        description: Human-readable description of the operation
        additional_data: Optional additional data to include in the log
    """
    logger = setup_audit_logger()
    client = get_current_client_info()

    logger.info(f"DELETE | {model_name} | ID: {record_id} | Client: {client} | "
                f"{description}{_format_extra(additional_data)}")


def audit_log_bulk_operation(operation: str, model_name: str, count: int, description: str,
                             additional_data: Optional[Dict[str, Any]] = None):
    """
    Log bulk database operations (e.g. inviting several players at once).

    Args:
        operation: Type of operation ('BULK_CREATE', 'BULK_UPDATE', 'BULK_DELETE')
        model_name: Name of the database model
        count: Number of records affected
        description: Human-readable description of the operation
        additional_data: Optional additional data to include in the log
    """
    logger = setup_audit_logger()
    client = get_current_client_info()

    logger.info(f"{operation} | {model_name} | Count: {count} | Client: {client} | "
                f"{description}{_format_extra(additional_data)}")


def audit_log_security_event(event_type: str, description: str,
                             additional_data: Optional[Dict[str, Any]] = None):
    """
    Log security-related events.

    Args:
        event_type: Type of security event ('INVALID_TOKEN', 'INVALID_PATH')
        description: Human-readable description of the event
        additional_data: Optional additional data to include in the log
    """
    logger = setup_audit_logger()
    client = get_current_client_info()

    logger.warning(f"SECURITY | {event_type} | Client: {client} | {description}")


def audit_log_file_operation(operation: str, filename: str, description: str,
                             additional_data: Optional[Dict[str, Any]] = None):
    """
    Log file operations (uploads, deletions).

    Args:
        operation: Type of file operation ('UPLOAD', 'DELETE')
        filename: Storage key of the file involved
        description: Human-readable description of the operation
        additional_data: Optional additional data to include in the log
    """
    logger = setup_audit_logger()
    client = get_current_client_info()

    logger.info(f"FILE | {operation} | File: {filename} | Client: {client} | {description}")


def get_model_changes(model_instance, form_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Helper function to detect changes between model instance and form data.

    Args:
        model_instance: The database model instance
        form_data: Dictionary of new values from form

    Returns:
        Dictionary of changes with old values
    """
    changes = {}

    for field, new_value in form_data.items():
        if hasattr(model_instance, field):
            old_value = getattr(model_instance, field)
            if old_value != new_value:
                changes[field] = str(old_value) if old_value is not None else None

    return changes
