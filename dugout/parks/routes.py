import sqlalchemy as sa
from flask import render_template, flash, redirect, url_for, current_app
from flask_wtf import FlaskForm

from dugout import db
from dugout.parks import bp
from dugout.parks.forms import ParkForm
from dugout.models import Park, Tournament
from dugout.audit import audit_log_create, audit_log_update, audit_log_delete, get_model_changes


@bp.route('/')
def list_parks():
    """List all parks by name"""
    parks = db.session.scalars(sa.select(Park).order_by(Park.name)).all()
    return render_template('parks/list.html', parks=parks, csrf_form=FlaskForm())


@bp.route('/add', methods=['GET', 'POST'])
def add_park():
    form = ParkForm()

    if form.validate_on_submit():
        try:
            park = Park(**form.park_data())
            db.session.add(park)
            db.session.commit()

            audit_log_create('Park', park.id, f'Created park: {park.name}')

            flash(f'Park "{park.name}" added.', 'success')
            return redirect(url_for('parks.list_parks'))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error creating park: {str(e)}")
            flash('An error occurred while adding the park.', 'error')

    return render_template('parks/form.html', form=form, park=None)


@bp.route('/<int:park_id>/edit', methods=['GET', 'POST'])
def edit_park(park_id):
    park = db.session.get(Park, park_id)
    if not park:
        flash('Park not found.', 'error')
        return redirect(url_for('parks.list_parks'))

    form = ParkForm(obj=park)

    if form.validate_on_submit():
        try:
            data = form.park_data()
            changes = get_model_changes(park, data)
            for field, value in data.items():
                setattr(park, field, value)
            db.session.commit()

            audit_log_update('Park', park.id, f'Updated park: {park.name}', changes)

            flash(f'Park "{park.name}" updated.', 'success')
            return redirect(url_for('parks.list_parks'))

        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error updating park {park_id}: {str(e)}")
            flash('An error occurred while updating the park.', 'error')

    return render_template('parks/form.html', form=form, park=park)


@bp.route('/<int:park_id>/delete', methods=['POST'])
def delete_park(park_id):
    """
    Delete a park. Tournaments that used it as their primary park lose the
    reference and it is removed from every tournament's park list.
    """
    csrf_form = FlaskForm()
    if not csrf_form.validate_on_submit():
        flash('Security validation failed.', 'error')
        return redirect(url_for('parks.list_parks'))

    try:
        park = db.session.get(Park, park_id)
        if not park:
            flash('Park not found.', 'error')
            return redirect(url_for('parks.list_parks'))

        name = park.name
        db.session.execute(
            sa.update(Tournament).where(Tournament.park_id == park_id).values(park_id=None)
        )
        park.tournaments.clear()
        db.session.delete(park)
        db.session.commit()

        audit_log_delete('Park', park_id, f'Deleted park: {name}')

        flash(f'Park "{name}" deleted.', 'success')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting park {park_id}: {str(e)}")
        flash('An error occurred while deleting the park.', 'error')

    return redirect(url_for('parks.list_parks'))
