"""
CLI Commands for the bonus catalog admin write path.
"""
from datetime import datetime

import click
from flask.cli import with_appcontext

from ..models.bonus import Bonus
from ..services.bonus_catalog import BonusCatalog
from ..utils.exceptions import BonusPointsError, ValidationError


def _echo_error(error: BonusPointsError):
    click.echo(f"Error: {error.message}", err=True)
    if isinstance(error, ValidationError):
        for field, messages in error.errors.items():
            click.echo(f"  {field}: {', '.join(messages)}", err=True)


def _parse_datetime(ctx, param, value):
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not an ISO timestamp")


@click.group('bonuses')
def bonuses_cli():
    """Bonus catalog commands."""
    pass


@bonuses_cli.command('list')
@click.option('--with-deleted', is_flag=True, help='Include soft-deleted bonuses')
@with_appcontext
def list_bonuses(with_deleted):
    """List bonuses."""
    query = Bonus.with_deleted() if with_deleted else Bonus.active()
    bonuses = query.order_by(Bonus.name.asc(), Bonus.id.asc()).all()

    if not bonuses:
        click.echo("No bonuses found")
        return

    for bonus in bonuses:
        marker = ' [deleted]' if bonus.is_deleted else ''
        click.echo(f"{bonus.id:>5}  {(bonus.slug or '-'):<40}  {bonus.points:>7} pts  {bonus.name}{marker}")


@bonuses_cli.command('create')
@click.option('--name', required=True, help='Bonus name')
@click.option('--points', type=int, default=0, show_default=True, help='Points needed to redeem')
@click.option('--description', help='Description')
@click.option('--slug', help='Explicit slug (generated from the name if omitted)')
@click.option('--available-on', callback=_parse_datetime, help='ISO timestamp the bonus becomes available')
@click.option('--discontinue-on', callback=_parse_datetime, help='ISO timestamp the bonus stops being available')
@click.option('--count-on-hand', type=int, default=0, show_default=True)
@with_appcontext
def create_bonus(name, points, description, slug, available_on, discontinue_on, count_on_hand):
    """Create a bonus."""
    attrs = {
        'name': name,
        'points': points,
        'description': description,
        'available_on': available_on,
        'discontinue_on': discontinue_on,
        'count_on_hand': count_on_hand,
    }
    if slug:
        attrs['slug'] = slug

    try:
        bonus = BonusCatalog().create_bonus(**attrs)
    except BonusPointsError as e:
        _echo_error(e)
        raise SystemExit(1)

    click.echo(f"Created bonus {bonus.id} ({bonus.slug})")


@bonuses_cli.command('update')
@click.argument('identifier')
@click.option('--name', help='Bonus name')
@click.option('--points', type=int, help='Points needed to redeem')
@click.option('--description', help='Description')
@click.option('--slug', help='New slug')
@click.option('--available-on', callback=_parse_datetime, help='ISO timestamp the bonus becomes available')
@click.option('--discontinue-on', callback=_parse_datetime, help='ISO timestamp the bonus stops being available')
@click.option('--count-on-hand', type=int)
@with_appcontext
def update_bonus(identifier, name, points, description, slug, available_on, discontinue_on, count_on_hand):
    """Update an active bonus."""
    attrs = {
        'name': name,
        'points': points,
        'description': description,
        'slug': slug,
        'available_on': available_on,
        'discontinue_on': discontinue_on,
        'count_on_hand': count_on_hand,
    }
    attrs = {key: value for key, value in attrs.items() if value is not None}

    try:
        bonus = BonusCatalog().update_bonus(identifier, **attrs)
    except BonusPointsError as e:
        _echo_error(e)
        raise SystemExit(1)

    click.echo(f"Updated bonus {bonus.id} ({bonus.slug})")


@bonuses_cli.command('destroy')
@click.argument('identifier')
@with_appcontext
def destroy_bonus(identifier):
    """Soft-delete a bonus and free its slug."""
    try:
        bonus = BonusCatalog().destroy_bonus(identifier)
    except BonusPointsError as e:
        _echo_error(e)
        raise SystemExit(1)

    click.echo(f"Destroyed bonus {bonus.id}, slug is now {bonus.slug}")


@bonuses_cli.command('restore')
@click.argument('identifier')
@with_appcontext
def restore_bonus(identifier):
    """Restore a soft-deleted bonus."""
    try:
        bonus = BonusCatalog().restore_bonus(identifier)
    except BonusPointsError as e:
        _echo_error(e)
        raise SystemExit(1)

    click.echo(f"Restored bonus {bonus.id} ({bonus.slug})")


@bonuses_cli.command('purge')
@click.argument('identifier')
@click.confirmation_option(prompt='Permanently delete this bonus and its images?')
@with_appcontext
def purge_bonus(identifier):
    """Permanently delete a bonus."""
    try:
        result = BonusCatalog().purge_bonus(identifier)
    except BonusPointsError as e:
        _echo_error(e)
        raise SystemExit(1)

    click.echo(f"Purged bonus {result['bonus_id']}")


@bonuses_cli.command('add-image')
@click.argument('identifier')
@click.argument('url')
@click.option('--alt', help='Alternative text')
@click.option('--position', type=int, help='Sort position (appended by default)')
@with_appcontext
def add_image(identifier, url, alt, position):
    """Attach an image to a bonus."""
    try:
        image = BonusCatalog().add_image(identifier, url, alt=alt, position=position)
    except BonusPointsError as e:
        _echo_error(e)
        raise SystemExit(1)

    click.echo(f"Added image {image.id} at position {image.position}")


def init_app(app):
    """Register bonus commands with the Flask app."""
    app.cli.add_command(bonuses_cli)
