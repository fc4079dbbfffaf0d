"""
Pages players open from links shared by the coaches. No payment flags are
shown here.
"""

from datetime import datetime

import sqlalchemy as sa
from flask import render_template, flash, redirect, url_for, current_app, abort

from dugout import db, limiter
from dugout.public import bp
from dugout.public.forms import SignatureForm
from dugout.models import TournamentInvitation
from dugout.tournaments.utils import get_tournament_by_slug, tournament_summary, combined_names
from dugout.audit import audit_log_update, audit_log_security_event
from dugout.storage import InvalidSignatureError, StorageError, decode_png_data_url, save_bytes, signature_key


INVALID_LINK_MESSAGE = 'Invalid or expired signature link'


@bp.route('/t/<slug>')
def tournament_view(slug):
    """Read-only tournament page for players"""
    tournament = get_tournament_by_slug(slug)
    if not tournament:
        abort(404)

    return render_template('public/tournament.html',
                           tournament=tournament,
                           summary=tournament_summary(tournament, public=True),
                           combined_names=combined_names,
                           parks=tournament.all_parks())


def _find_invitation(token):
    if not token:
        return None
    return db.session.scalars(
        sa.select(TournamentInvitation).where(TournamentInvitation.signature_token == token)
    ).first()


@bp.route('/sign/<token>', methods=['GET', 'POST'])
@limiter.limit("30 per minute", methods=['POST'])
def sign(token):
    """
    Waiver signature page. Shows the waiver (or the default release text)
    and stores the drawn signature as a PNG.
    """
    invitation = _find_invitation(token)
    if not invitation:
        audit_log_security_event('INVALID_TOKEN', 'Signature page opened with an unknown token')
        return render_template('public/sign.html', error=INVALID_LINK_MESSAGE,
                               invitation=None, form=None), 404

    tournament = invitation.tournament
    waiver = tournament.get_waiver()

    if invitation.is_signed:
        return render_template('public/sign.html', invitation=invitation, tournament=tournament,
                               waiver=waiver, signed=True, form=None, error=None)

    form = SignatureForm()

    if form.validate_on_submit():
        try:
            data = decode_png_data_url(form.signature.data)
            key = save_bytes(data, signature_key(invitation.id))

            invitation.signature_filename = key
            invitation.signed_at = datetime.utcnow()
            db.session.commit()

            audit_log_update('TournamentInvitation', invitation.id,
                             f'Waiver signed by {invitation.player.full_name} for {tournament.name}')

            return redirect(url_for('public.sign', token=token))

        except InvalidSignatureError as e:
            db.session.rollback()
            current_app.logger.warning(f"Rejected signature for invitation {invitation.id}: {str(e)}")
            flash(str(e), 'error')
        except StorageError as e:
            db.session.rollback()
            current_app.logger.error(f"Error saving signature for invitation {invitation.id}: {str(e)}")
            flash('Failed to save signature', 'error')
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error saving signature for invitation {invitation.id}: {str(e)}")
            flash('Failed to save signature', 'error')

    return render_template('public/sign.html', invitation=invitation, tournament=tournament,
                           waiver=waiver, signed=False, form=form, error=None)
