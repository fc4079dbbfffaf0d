"""
Tournament routes: list, calendar, create/edit/archive/delete, the detail page
with invitations, payments, documents and lodging, and the roster exports.
"""

import io
from datetime import date

import sqlalchemy as sa
from flask import (
    render_template, flash, redirect, url_for, request, current_app, Response, send_file, abort
)
from flask_wtf import FlaskForm

from dugout import db
from dugout.tournaments import bp
from dugout.tournaments.forms import (
    TournamentForm, InviteForm, DocumentForm, TournamentImageForm, LodgingForm,
    InvitationLodgingForm, AFAExportForm, DivisorForm
)
from dugout.tournaments.utils import (
    get_tournaments, get_tournament_detail, get_available_players, tournament_summary,
    existing_locations, calendar_month, month_offset, sorted_invitations, combined_names,
    messaging_summary, signature_link, signature_links_message
)
from dugout.models import Tournament, TournamentInvitation, Park, Document, LodgingOption
from dugout.audit import (
    audit_log_create, audit_log_update, audit_log_delete, audit_log_bulk_operation, get_model_changes
)
from dugout.storage import (
    StorageError, save_upload, delete_file, read_bytes, file_extension,
    document_key, tournament_image_key
)
from dugout.exports.roster_pdf import build_roster_pdf, roster_filename, RosterExportError
from dugout.exports.afa_form import build_afa_form, build_calibration_pdf, afa_filename


MONTHS = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
          'August', 'September', 'October', 'November', 'December']


def _public_base_url():
    return current_app.config.get('PUBLIC_BASE_URL') or request.url_root.rstrip('/')


def _all_parks():
    return db.session.scalars(sa.select(Park).order_by(Park.name)).all()


def _get_tournament_or_redirect(tournament_id):
    tournament = db.session.get(Tournament, tournament_id)
    if not tournament:
        flash('Tournament not found.', 'error')
    return tournament


def _check_csrf(redirect_to):
    """Validate the CSRF token of a bare POST; returns a redirect on failure."""
    csrf_form = FlaskForm()
    if not csrf_form.validate_on_submit():
        flash('Security validation failed.', 'error')
        return redirect(redirect_to)
    return None


@bp.route('/')
def list_tournaments():
    """
    Tournament list, newest first. Archived tournaments are hidden unless requested.
    """
    try:
        show_archived = request.args.get('show_archived') == '1'
        tournaments = get_tournaments(show_archived=show_archived)

        return render_template('tournaments/list.html',
                               tournaments=tournaments,
                               show_archived=show_archived,
                               csrf_form=FlaskForm())

    except Exception as e:
        current_app.logger.error(f"Error loading tournaments: {str(e)}")
        flash('An error occurred while loading tournaments.', 'error')
        return render_template('tournaments/list.html', tournaments=[], show_archived=False,
                               csrf_form=FlaskForm())


@bp.route('/calendar')
def calendar_view():
    """Month calendar of tournaments with previous/next/today navigation"""
    today = date.today()
    try:
        year = int(request.args.get('year', today.year))
        month = int(request.args.get('month', today.month))
        if not 1 <= month <= 12:
            raise ValueError(month)
    except ValueError:
        year, month = today.year, today.month

    tournaments = get_tournaments(show_archived=True)
    prev_year, prev_month = month_offset(year, month, -1)
    next_year, next_month = month_offset(year, month, 1)

    return render_template('tournaments/calendar.html',
                           days=calendar_month(year, month, tournaments),
                           title=f"{MONTHS[month - 1]} {year}",
                           today=today,
                           prev_args={'year': prev_year, 'month': prev_month},
                           next_args={'year': next_year, 'month': next_month})


@bp.route('/create', methods=['GET', 'POST'])
def create_tournament():
    """Create a new tournament"""
    form = TournamentForm(parks=_all_parks())

    if form.validate_on_submit():
        try:
            tournament = Tournament(**form.tournament_data())
            tournament.parks = [db.session.get(Park, pid) for pid in form.park_ids.data]
            db.session.add(tournament)
            db.session.commit()

            audit_log_create('Tournament', tournament.id,
                             f'Created tournament: {tournament.name} on {tournament.date}')

            flash(f'Tournament "{tournament.name}" created.', 'success')
            return redirect(url_for('tournaments.detail', tournament_id=tournament.id))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error creating tournament: {str(e)}")
            flash('An error occurred while creating the tournament.', 'error')

    return render_template('tournaments/form.html', form=form, tournament=None,
                           locations=existing_locations(get_tournaments(show_archived=True)))


@bp.route('/<int:tournament_id>/edit', methods=['GET', 'POST'])
def edit_tournament(tournament_id):
    """Edit tournament details"""
    tournament = _get_tournament_or_redirect(tournament_id)
    if not tournament:
        return redirect(url_for('tournaments.list_tournaments'))

    form = TournamentForm(parks=_all_parks(), obj=tournament)
    if request.method == 'GET':
        form.park_id.data = tournament.park_id or 0
        form.park_ids.data = [p.id for p in tournament.parks]

    if form.validate_on_submit():
        try:
            data = form.tournament_data()
            changes = get_model_changes(tournament, data)
            for field, value in data.items():
                setattr(tournament, field, value)
            tournament.parks = [db.session.get(Park, pid) for pid in form.park_ids.data]
            db.session.commit()

            audit_log_update('Tournament', tournament.id, f'Updated tournament: {tournament.name}', changes)

            flash(f'Tournament "{tournament.name}" updated.', 'success')
            return redirect(url_for('tournaments.detail', tournament_id=tournament.id))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error updating tournament {tournament_id}: {str(e)}")
            flash('An error occurred while updating the tournament.', 'error')

    return render_template('tournaments/form.html', form=form, tournament=tournament,
                           locations=existing_locations(get_tournaments(show_archived=True)))


@bp.route('/<int:tournament_id>/archive', methods=['POST'])
def archive_tournament(tournament_id):
    """Archive or unarchive a tournament"""
    failed = _check_csrf(url_for('tournaments.list_tournaments'))
    if failed:
        return failed

    try:
        tournament = _get_tournament_or_redirect(tournament_id)
        if not tournament:
            return redirect(url_for('tournaments.list_tournaments'))

        archived = request.form.get('archived', '1') == '1'
        tournament.archived = archived
        db.session.commit()

        audit_log_update('Tournament', tournament.id,
                         f'{"Archived" if archived else "Unarchived"} tournament: {tournament.name}',
                         {'archived': str(not archived)})

        flash(f'Tournament "{tournament.name}" {"archived" if archived else "restored"}.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error archiving tournament {tournament_id}: {str(e)}")
        flash('An error occurred while archiving the tournament.', 'error')

    return redirect(url_for('tournaments.list_tournaments'))


@bp.route('/<int:tournament_id>/delete', methods=['POST'])
def delete_tournament(tournament_id):
    """Delete a tournament with its invitations, documents and lodging"""
    failed = _check_csrf(url_for('tournaments.list_tournaments'))
    if failed:
        return failed

    try:
        tournament = _get_tournament_or_redirect(tournament_id)
        if not tournament:
            return redirect(url_for('tournaments.list_tournaments'))

        name = tournament.name
        stored_keys = [doc.filename for doc in tournament.documents]
        stored_keys += [inv.signature_filename for inv in tournament.invitations if inv.signature_filename]
        if tournament.image_filename:
            stored_keys.append(tournament.image_filename)

        db.session.delete(tournament)
        db.session.commit()

        for key in stored_keys:
            try:
                delete_file(key)
            except StorageError as e:
                current_app.logger.warning(f"Could not remove stored file {key}: {str(e)}")

        audit_log_delete('Tournament', tournament_id, f'Deleted tournament: {name}',
                         {'files_removed': len(stored_keys)})

        flash(f'Tournament "{name}" deleted.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting tournament {tournament_id}: {str(e)}")
        flash('An error occurred while deleting the tournament.', 'error')

    return redirect(url_for('tournaments.list_tournaments'))


@bp.route('/<int:tournament_id>')
def detail(tournament_id):
    """
    Tournament detail: RSVP summary, cost split, payments, invitations,
    group text, signatures, documents and lodging.
    """
    tournament = get_tournament_detail(tournament_id)
    if not tournament:
        abort(404)

    try:
        divisor_form = DivisorForm(request.args)
        custom_divisor = divisor_form.divisor.data if divisor_form.validate() else None
        include_out = request.args.get('include_out') == '1'

        summary = tournament_summary(tournament, custom_divisor=custom_divisor)
        base_url = _public_base_url()
        available_players = get_available_players(tournament)

        return render_template(
            'tournaments/detail.html',
            tournament=tournament,
            summary=summary,
            invitations=sorted_invitations(tournament.invitations),
            combined_names=combined_names,
            divisor_form=divisor_form,
            include_out=include_out,
            messaging=messaging_summary(tournament.invitations, include_out),
            signature_links={inv.id: signature_link(base_url, inv.signature_token)
                             for inv in tournament.invitations},
            share_url=f"{base_url}{url_for('public.tournament_view', slug=tournament.slug)}",
            invite_form=InviteForm(players=available_players),
            available_players=available_players,
            document_form=DocumentForm(),
            image_form=TournamentImageForm(),
            lodging_form=LodgingForm(),
            lodging_choice_forms={
                inv.id: InvitationLodgingForm(lodging_options=tournament.lodging_options, obj=inv,
                                              prefix=f'inv{inv.id}')
                for inv in tournament.invitations
            },
            csrf_form=FlaskForm(),
        )

    except Exception as e:
        current_app.logger.error(f"Error loading tournament {tournament_id}: {str(e)}")
        flash('An error occurred while loading the tournament.', 'error')
        return redirect(url_for('tournaments.list_tournaments'))


@bp.route('/<int:tournament_id>/invite', methods=['POST'])
def invite_players(tournament_id):
    """Invite one or more players; they start as pending"""
    tournament = _get_tournament_or_redirect(tournament_id)
    if not tournament:
        return redirect(url_for('tournaments.list_tournaments'))

    form = InviteForm(players=get_available_players(tournament))

    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(url_for('tournaments.detail', tournament_id=tournament_id))

    try:
        for player_id in form.player_ids.data:
            db.session.add(TournamentInvitation(tournament_id=tournament.id, player_id=player_id,
                                                status='pending'))
        db.session.commit()

        audit_log_bulk_operation('BULK_CREATE', 'TournamentInvitation', len(form.player_ids.data),
                                 f'Invited players to {tournament.name}',
                                 {'player_ids': form.player_ids.data})

        flash(f'Invited {len(form.player_ids.data)} player(s).', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error inviting players to tournament {tournament_id}: {str(e)}")
        flash('An error occurred while inviting players.', 'error')

    return redirect(url_for('tournaments.detail', tournament_id=tournament_id))


def _get_invitation(invitation_id):
    invitation = db.session.get(TournamentInvitation, invitation_id)
    if not invitation:
        flash('Invitation not found.', 'error')
    return invitation


@bp.route('/invitations/<int:invitation_id>/status', methods=['POST'])
def update_status(invitation_id):
    """Set an invitation to pending, in or out"""
    invitation = _get_invitation(invitation_id)
    if not invitation:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=invitation.tournament_id)

    failed = _check_csrf(back)
    if failed:
        return failed

    status = request.form.get('status')
    if status not in current_app.config['INVITATION_STATUSES']:
        flash('Invalid status.', 'error')
        return redirect(back)

    try:
        old_status = invitation.status
        invitation.status = status
        db.session.commit()

        audit_log_update('TournamentInvitation', invitation.id,
                         f'Status for {invitation.player.full_name}: {old_status} -> {status}',
                         {'status': old_status})

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating invitation {invitation_id} status: {str(e)}")
        flash('An error occurred while updating the status.', 'error')

    return redirect(back)


@bp.route('/invitations/<int:invitation_id>/paid', methods=['POST'])
def update_paid(invitation_id):
    """Mark an invitation paid or unpaid"""
    invitation = _get_invitation(invitation_id)
    if not invitation:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=invitation.tournament_id)

    failed = _check_csrf(back)
    if failed:
        return failed

    try:
        paid = request.form.get('paid') == '1'
        invitation.paid = paid
        db.session.commit()

        audit_log_update('TournamentInvitation', invitation.id,
                         f'{invitation.player.full_name} marked {"paid" if paid else "unpaid"}',
                         {'paid': str(not paid)})

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating invitation {invitation_id} payment: {str(e)}")
        flash('An error occurred while updating the payment.', 'error')

    return redirect(back)


@bp.route('/invitations/<int:invitation_id>/remove', methods=['POST'])
def remove_invitation(invitation_id):
    """Remove a player from a tournament"""
    invitation = _get_invitation(invitation_id)
    if not invitation:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=invitation.tournament_id)

    failed = _check_csrf(back)
    if failed:
        return failed

    try:
        name = invitation.player.full_name
        signature = invitation.signature_filename
        db.session.delete(invitation)
        db.session.commit()

        if signature:
            try:
                delete_file(signature)
            except StorageError as e:
                current_app.logger.warning(f"Could not remove signature {signature}: {str(e)}")

        audit_log_delete('TournamentInvitation', invitation_id, f'Removed {name} from tournament')
        flash(f'{name} removed from the tournament.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error removing invitation {invitation_id}: {str(e)}")
        flash('An error occurred while removing the player.', 'error')

    return redirect(back)


@bp.route('/invitations/<int:invitation_id>/lodging', methods=['POST'])
def update_invitation_lodging(invitation_id):
    """Record where an invitee is staying and how many people they bring"""
    invitation = _get_invitation(invitation_id)
    if not invitation:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=invitation.tournament_id)

    form = InvitationLodgingForm(lodging_options=invitation.tournament.lodging_options,
                                 prefix=f'inv{invitation.id}')
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(back)

    try:
        data = form.lodging_data()
        changes = get_model_changes(invitation, data)
        for field, value in data.items():
            setattr(invitation, field, value)
        db.session.commit()

        audit_log_update('TournamentInvitation', invitation.id,
                         f'Lodging for {invitation.player.full_name}', changes)

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating lodging for invitation {invitation_id}: {str(e)}")
        flash('An error occurred while updating lodging.', 'error')

    return redirect(back)


@bp.route('/<int:tournament_id>/documents', methods=['POST'])
def add_document(tournament_id):
    """Upload a PDF or image document"""
    tournament = _get_tournament_or_redirect(tournament_id)
    if not tournament:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=tournament_id)

    form = DocumentForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(back)

    upload = form.file.data
    key = document_key(tournament.id, upload.filename)
    try:
        save_upload(upload, key)
    except StorageError as e:
        current_app.logger.error(f"Error storing document for tournament {tournament_id}: {str(e)}")
        flash('Failed to upload file.', 'error')
        return redirect(back)

    try:
        if form.is_waiver.data:
            for doc in tournament.documents:
                doc.is_waiver = False

        document = Document(
            tournament_id=tournament.id,
            name=(form.name.data or '').strip() or upload.filename,
            filename=key,
            file_type='pdf' if file_extension(upload.filename) == 'pdf' else 'image',
            is_waiver=bool(form.is_waiver.data),
        )
        db.session.add(document)
        db.session.commit()

        audit_log_create('Document', document.id, f'Uploaded {document.name} to {tournament.name}',
                         {'waiver': document.is_waiver})
        flash(f'Document "{document.name}" uploaded.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving document for tournament {tournament_id}: {str(e)}")
        try:
            delete_file(key)
        except StorageError:
            current_app.logger.warning(f"Could not clean up stored file {key}")
        flash('Failed to upload file.', 'error')

    return redirect(back)


@bp.route('/documents/<int:document_id>/delete', methods=['POST'])
def delete_document(document_id):
    """Delete a document and its stored file"""
    document = db.session.get(Document, document_id)
    if not document:
        flash('Document not found.', 'error')
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=document.tournament_id)

    failed = _check_csrf(back)
    if failed:
        return failed

    try:
        delete_file(document.filename)
        name = document.name
        db.session.delete(document)
        db.session.commit()

        audit_log_delete('Document', document_id, f'Deleted document: {name}')
        flash(f'Document "{name}" deleted.', 'success')

    except StorageError as e:
        current_app.logger.error(f"Error removing stored document {document_id}: {str(e)}")
        flash('Failed to delete file.', 'error')
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting document {document_id}: {str(e)}")
        flash('Failed to delete file.', 'error')

    return redirect(back)


@bp.route('/documents/<int:document_id>/waiver', methods=['POST'])
def toggle_waiver(document_id):
    """Mark a document as the waiver (clearing any other) or unmark it"""
    document = db.session.get(Document, document_id)
    if not document:
        flash('Document not found.', 'error')
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=document.tournament_id)

    failed = _check_csrf(back)
    if failed:
        return failed

    try:
        make_waiver = not document.is_waiver
        if make_waiver:
            db.session.execute(
                sa.update(Document)
                .where(Document.tournament_id == document.tournament_id, Document.id != document.id)
                .values(is_waiver=False)
            )
        document.is_waiver = make_waiver
        db.session.commit()

        audit_log_update('Document', document.id,
                         f'{"Set" if make_waiver else "Cleared"} waiver: {document.name}',
                         {'is_waiver': str(not make_waiver)})

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error toggling waiver on document {document_id}: {str(e)}")
        flash('An error occurred while updating the waiver.', 'error')

    return redirect(back)


@bp.route('/<int:tournament_id>/image', methods=['POST'])
def upload_image(tournament_id):
    """Upload or replace the tournament banner image"""
    tournament = _get_tournament_or_redirect(tournament_id)
    if not tournament:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=tournament_id)

    form = TournamentImageForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(back)

    upload = form.image.data
    key = tournament_image_key(tournament.id, upload.filename)
    try:
        save_upload(upload, key)
        old_key = tournament.image_filename
        tournament.image_filename = key
        db.session.commit()

        if old_key:
            delete_file(old_key)

        audit_log_update('Tournament', tournament.id, f'Uploaded image for {tournament.name}',
                         {'image_filename': old_key})
        flash('Tournament image updated.', 'success')

    except StorageError as e:
        db.session.rollback()
        current_app.logger.error(f"Error storing image for tournament {tournament_id}: {str(e)}")
        flash('Failed to upload image.', 'error')
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving image for tournament {tournament_id}: {str(e)}")
        flash('Failed to upload image.', 'error')

    return redirect(back)


@bp.route('/<int:tournament_id>/lodging/add', methods=['POST'])
def add_lodging(tournament_id):
    tournament = _get_tournament_or_redirect(tournament_id)
    if not tournament:
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=tournament_id)

    form = LodgingForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(back)

    try:
        option = LodgingOption(tournament_id=tournament.id, **form.lodging_data())
        db.session.add(option)
        db.session.commit()

        audit_log_create('LodgingOption', option.id, f'Added lodging {option.name} to {tournament.name}')
        flash(f'Lodging "{option.name}" added.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error adding lodging to tournament {tournament_id}: {str(e)}")
        flash('An error occurred while adding lodging.', 'error')

    return redirect(back)


@bp.route('/lodging/<int:lodging_id>/edit', methods=['GET', 'POST'])
def edit_lodging(lodging_id):
    option = db.session.get(LodgingOption, lodging_id)
    if not option:
        flash('Lodging option not found.', 'error')
        return redirect(url_for('tournaments.list_tournaments'))

    form = LodgingForm(obj=option)

    if form.validate_on_submit():
        try:
            data = form.lodging_data()
            changes = get_model_changes(option, data)
            for field, value in data.items():
                setattr(option, field, value)
            db.session.commit()

            audit_log_update('LodgingOption', option.id, f'Updated lodging: {option.name}', changes)
            flash(f'Lodging "{option.name}" updated.', 'success')
            return redirect(url_for('tournaments.detail', tournament_id=option.tournament_id))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error updating lodging {lodging_id}: {str(e)}")
            flash('An error occurred while updating lodging.', 'error')

    return render_template('tournaments/lodging_form.html', form=form, option=option)


@bp.route('/lodging/<int:lodging_id>/delete', methods=['POST'])
def delete_lodging(lodging_id):
    """Delete a lodging option and clear it from invitations that chose it"""
    option = db.session.get(LodgingOption, lodging_id)
    if not option:
        flash('Lodging option not found.', 'error')
        return redirect(url_for('tournaments.list_tournaments'))
    back = url_for('tournaments.detail', tournament_id=option.tournament_id)

    failed = _check_csrf(back)
    if failed:
        return failed

    try:
        name = option.name
        for invitation in list(option.invitations):
            invitation.lodging_id = None
            invitation.lodging_status = None
        db.session.delete(option)
        db.session.commit()

        audit_log_delete('LodgingOption', lodging_id, f'Deleted lodging: {name}')
        flash(f'Lodging "{name}" deleted.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting lodging {lodging_id}: {str(e)}")
        flash('An error occurred while deleting lodging.', 'error')

    return redirect(back)


@bp.route('/<int:tournament_id>/roster.pdf')
def export_roster(tournament_id):
    """Download the roster of players who are in as a PDF"""
    tournament = get_tournament_detail(tournament_id)
    if not tournament:
        abort(404)

    try:
        pdf = build_roster_pdf(tournament, tournament.invitations,
                               current_app.config['TEAM_NAME'], current_app.config['TEAM_CITY'],
                               current_app.config['COACHES'], read_bytes)
    except RosterExportError as e:
        flash(str(e), 'error')
        return redirect(url_for('tournaments.detail', tournament_id=tournament_id))

    return send_file(io.BytesIO(pdf), mimetype='application/pdf', as_attachment=True,
                     download_name=roster_filename(tournament.name))


@bp.route('/<int:tournament_id>/afa', methods=['GET', 'POST'])
def export_afa(tournament_id):
    """Team and manager details for the AFA roster form, then the PDF overlay"""
    tournament = get_tournament_detail(tournament_id)
    if not tournament:
        abort(404)

    defaults = dict(current_app.config['AFA_DEFAULTS'])
    form = AFAExportForm(data=None if request.method == 'POST' else defaults)

    if form.validate_on_submit():
        try:
            pdf = build_afa_form(tournament, tournament.invitations, current_app.config, read_bytes,
                                 overrides=form.overrides())
        except RosterExportError as e:
            flash(str(e), 'error')
            return redirect(url_for('tournaments.detail', tournament_id=tournament_id))

        return send_file(io.BytesIO(pdf), mimetype='application/pdf', as_attachment=True,
                         download_name=afa_filename(tournament.name))

    return render_template('tournaments/afa_form.html', form=form, tournament=tournament)


@bp.route('/afa/calibration.pdf')
def afa_calibration():
    """Grid sheet for checking the AFA field positions"""
    pdf = build_calibration_pdf(current_app.config['AFA_LAYOUT'], current_app.config['AFA_PLAYER_ROW_HEIGHT'])
    return send_file(io.BytesIO(pdf), mimetype='application/pdf', as_attachment=True,
                     download_name='AFA_Calibration_Grid.pdf')


@bp.route('/<int:tournament_id>/signature-links.txt')
def signature_links(tournament_id):
    """Copy-ready message with a signature link for each unsigned player who is in"""
    tournament = get_tournament_detail(tournament_id)
    if not tournament:
        abort(404)

    message = signature_links_message(tournament.name, tournament.invitations, _public_base_url())
    return Response(message, mimetype='text/plain')
