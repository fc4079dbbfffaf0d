# JSON read endpoints for scripted clients
import sqlalchemy as sa
from flask import jsonify, request, current_app

from dugout.api import bp
from dugout import db
from dugout.models import Player, Park
from dugout.players.utils import filter_players, sort_players, list_filters_from_args
from dugout.tournaments.utils import (
    get_tournaments, get_tournament_detail, tournament_summary, sorted_invitations,
    existing_locations, invitation_name, parse_divisor
)
from dugout.storage import file_url


def _money(value):
    return str(value) if value is not None else None


def _player_data(player):
    return {
        'id': player.id,
        'first_name': player.first_name,
        'last_name': player.last_name,
        'jersey_name': player.jersey_name,
        'phone': player.phone,
        'email': player.email,
        'address': player.address,
        'date_of_birth': player.date_of_birth.isoformat() if player.date_of_birth else None,
        'gender': player.gender,
        'uniform_number': player.uniform_number,
        'jersey_size': player.jersey_size,
        'jersey_types': player.jersey_types or [],
    }


def _park_data(park):
    return {
        'id': park.id,
        'name': park.name,
        'address': park.address,
        'city': park.city,
        'state': park.state,
        'maps_url': park.maps_url,
    }


def _tournament_data(tournament):
    return {
        'id': tournament.id,
        'name': tournament.name,
        'type': tournament.type,
        'location': tournament.location,
        'date': tournament.date.isoformat(),
        'total_cost': _money(tournament.total_cost),
        'additional_fees': _money(tournament.additional_fees),
        'venmo_link': tournament.venmo_link,
        'image_url': file_url(tournament.image_filename),
        'archived': tournament.archived,
        'park_id': tournament.park_id,
        'slug': tournament.slug,
    }


def _invitation_data(invitation):
    return {
        'id': invitation.id,
        'player_id': invitation.player_id,
        'name': invitation_name(invitation),
        'gender': invitation.player.gender if invitation.player else None,
        'status': invitation.status,
        'paid': invitation.paid,
        'signed': invitation.is_signed,
        'signed_at': invitation.signed_at.isoformat() if invitation.signed_at else None,
        'lodging_id': invitation.lodging_id,
        'lodging_status': invitation.lodging_status,
        'lodging_adults': invitation.lodging_adults,
        'lodging_kids': invitation.lodging_kids,
    }


@bp.route('/players')
def players():
    """
    Players, with the same filter and sort arguments as the roster page
    """
    try:
        filters = list_filters_from_args(request.args)
        all_players = db.session.scalars(sa.select(Player).order_by(Player.last_name)).all()
        filtered = sort_players(
            filter_players(all_players, filters['search'], filters['gender'], filters['jersey_types']),
            filters['sort'], filters['direction']
        )

        return jsonify({
            'success': True,
            'total': len(all_players),
            'count': len(filtered),
            'players': [_player_data(p) for p in filtered]
        })

    except Exception as e:
        current_app.logger.error(f"Error in players API: {str(e)}")
        return jsonify({
            'success': False,
            'error': 'An error occurred while loading players'
        }), 500


@bp.route('/parks')
def parks():
    try:
        all_parks = db.session.scalars(sa.select(Park).order_by(Park.name)).all()
        return jsonify({'success': True, 'parks': [_park_data(p) for p in all_parks]})

    except Exception as e:
        current_app.logger.error(f"Error in parks API: {str(e)}")
        return jsonify({
            'success': False,
            'error': 'An error occurred while loading parks'
        }), 500


@bp.route('/tournaments')
def tournaments():
    try:
        show_archived = request.args.get('show_archived') == '1'
        return jsonify({
            'success': True,
            'tournaments': [_tournament_data(t) for t in get_tournaments(show_archived=show_archived)]
        })

    except Exception as e:
        current_app.logger.error(f"Error in tournaments API: {str(e)}")
        return jsonify({
            'success': False,
            'error': 'An error occurred while loading tournaments'
        }), 500


@bp.route('/tournaments/locations')
def locations():
    """Location suggestions taken from earlier tournaments"""
    try:
        return jsonify({
            'success': True,
            'locations': existing_locations(get_tournaments(show_archived=True))
        })

    except Exception as e:
        current_app.logger.error(f"Error in locations API: {str(e)}")
        return jsonify({
            'success': False,
            'error': 'An error occurred while loading locations'
        }), 500


@bp.route('/tournaments/<int:tournament_id>')
def tournament_detail(tournament_id):
    """
    Tournament with invitations, documents, lodging and the cost summary.

    Accepts an optional ``divisor`` argument to split the cost between a
    custom number of players.
    """
    try:
        tournament = get_tournament_detail(tournament_id)
        if not tournament:
            return jsonify({
                'success': False,
                'error': 'Tournament not found'
            }), 404

        summary = tournament_summary(tournament, custom_divisor=parse_divisor(request.args.get('divisor')))

        data = _tournament_data(tournament)
        data['parks'] = [_park_data(p) for p in tournament.all_parks()]
        data['invitations'] = [_invitation_data(inv) for inv in sorted_invitations(tournament.invitations)]
        data['documents'] = [{
            'id': doc.id,
            'name': doc.name,
            'file_type': doc.file_type,
            'is_waiver': doc.is_waiver,
            'url': file_url(doc.filename),
        } for doc in tournament.documents]
        data['lodging'] = [{
            'id': option.id,
            'name': option.name,
            'url': option.url,
            'capacity': option.capacity,
            'total_cost': _money(option.total_cost),
            'additional_fees': _money(option.additional_fees),
            'venmo_link': option.venmo_link,
            'stats': summary['lodging_stats'][option.id],
        } for option in tournament.lodging_options]
        data['summary'] = {
            'status_counts': summary['status_counts'],
            'cost_per_player': summary['cost_per_player'],
            'divisor': summary['divisor'],
            'paid': [invitation_name(inv) for inv in summary['payment_status']['paid']],
            'unpaid': [invitation_name(inv) for inv in summary['payment_status']['unpaid']],
            'total_paid': summary['payment_totals']['total_paid'],
            'amount_due': summary['payment_totals']['amount_due'],
            'payment_message': summary['payment_message'],
            'unsigned_count': len(summary['signatures']['unsigned']),
        }

        return jsonify({'success': True, 'tournament': data})

    except Exception as e:
        current_app.logger.error(f"Error in tournament detail API: {str(e)}")
        return jsonify({
            'success': False,
            'error': 'An error occurred while loading the tournament'
        }), 500
