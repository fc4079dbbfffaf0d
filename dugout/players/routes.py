"""
Roster routes: list, add, edit, delete and CSV export.
"""

import sqlalchemy as sa
from flask import render_template, flash, redirect, url_for, request, current_app, Response
from flask_wtf import FlaskForm

from dugout import db
from dugout.players import bp
from dugout.players.forms import PlayerForm
from dugout.players.utils import (
    filter_players, sort_players, list_filters_from_args, next_sort_direction, SORTABLE_FIELDS
)
from dugout.models import Player
from dugout.audit import audit_log_create, audit_log_update, audit_log_delete, get_model_changes
from dugout.exports.csv_export import player_export_rows, to_csv


def _filtered_players(filters):
    players = db.session.scalars(sa.select(Player).order_by(Player.last_name)).all()
    filtered = filter_players(players, filters['search'], filters['gender'], filters['jersey_types'])
    return players, sort_players(filtered, filters['sort'], filters['direction'])


@bp.route('/')
def list_players():
    """
    Roster list with search, gender and jersey type filters plus column sorting
    """
    try:
        filters = list_filters_from_args(request.args)
        players, filtered = _filtered_players(filters)

        sort_links = {
            field: next_sort_direction(filters['sort'], filters['direction'], field)
            for field in SORTABLE_FIELDS
        }

        return render_template('players/list.html',
                               players=filtered,
                               total_count=len(players),
                               filters=filters,
                               sort_links=sort_links,
                               genders=current_app.config['GENDERS'],
                               csrf_form=FlaskForm())

    except Exception as e:
        current_app.logger.error(f"Error loading players: {str(e)}")
        flash('An error occurred while loading players.', 'error')
        return redirect(url_for('main.index'))


@bp.route('/add', methods=['GET', 'POST'])
def add_player():
    """Add a player to the roster"""
    form = PlayerForm()

    if form.validate_on_submit():
        try:
            player = Player(**form.player_data())
            db.session.add(player)
            db.session.commit()

            audit_log_create('Player', player.id, f'Created player: {player.full_name}')

            flash(f'{player.full_name} added to the roster.', 'success')
            return redirect(url_for('players.list_players'))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error creating player: {str(e)}")
            flash('An error occurred while adding the player.', 'error')

    return render_template('players/form.html', form=form, player=None)


@bp.route('/<int:player_id>/edit', methods=['GET', 'POST'])
def edit_player(player_id):
    """Edit an existing player"""
    player = db.session.get(Player, player_id)
    if not player:
        flash('Player not found.', 'error')
        return redirect(url_for('players.list_players'))

    form = PlayerForm(obj=player)

    if form.validate_on_submit():
        try:
            data = form.player_data()
            changes = get_model_changes(player, data)
            for field, value in data.items():
                setattr(player, field, value)
            db.session.commit()

            audit_log_update('Player', player.id, f'Updated player: {player.full_name}', changes)

            flash(f'{player.full_name} updated.', 'success')
            return redirect(url_for('players.list_players'))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error updating player {player_id}: {str(e)}")
            flash('An error occurred while updating the player.', 'error')

    return render_template('players/form.html', form=form, player=player)


@bp.route('/<int:player_id>/delete', methods=['POST'])
def delete_player(player_id):
    """Delete a player and their tournament invitations"""
    csrf_form = FlaskForm()
    if not csrf_form.validate_on_submit():
        flash('Security validation failed.', 'error')
        return redirect(url_for('players.list_players'))

    try:
        player = db.session.get(Player, player_id)
        if not player:
            flash('Player not found.', 'error')
            return redirect(url_for('players.list_players'))

        name = player.full_name
        invitation_count = len(player.invitations)
        db.session.delete(player)
        db.session.commit()

        audit_log_delete('Player', player_id, f'Deleted player: {name}',
                         {'invitations_removed': invitation_count})

        flash(f'{name} removed from the roster.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting player {player_id}: {str(e)}")
        flash('An error occurred while deleting the player.', 'error')

    return redirect(url_for('players.list_players'))


@bp.route('/export.csv')
def export_players():
    """Download the filtered, sorted roster as CSV"""
    try:
        filters = list_filters_from_args(request.args)
        _, filtered = _filtered_players(filters)
        csv_text = to_csv(player_export_rows(filtered))

        return Response(
            csv_text,
            mimetype='text/csv',
            headers={'Content-Disposition': 'attachment; filename=players.csv'}
        )

    except Exception as e:
        current_app.logger.error(f"Error exporting players: {str(e)}")
        flash('An error occurred while exporting players.', 'error')
        return redirect(url_for('players.list_players'))
