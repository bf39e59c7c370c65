"""
Tests for the bonus catalog CLI commands.
"""
from datetime import datetime

from bonus_points.extensions import db
from bonus_points.models import Bonus


class TestBonusCommands:

    def test_create(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['bonuses', 'create', '--name', 'Coffee Mug', '--points', '500'])

        assert result.exit_code == 0, result.output
        assert 'coffee-mug' in result.output
        assert Bonus.query.filter_by(slug='coffee-mug').count() == 1

    def test_create_invalid(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['bonuses', 'create', '--name', ' '])

        assert result.exit_code == 1
        assert 'name' in result.output

    def test_list(self, app, sample_bonus):
        result = app.test_cli_runner().invoke(args=['bonuses', 'list'])
        assert 'reward-x' in result.output

    def test_destroy_and_restore(self, app, sample_bonus):
        runner = app.test_cli_runner()
        bonus_id = sample_bonus.id

        result = runner.invoke(args=['bonuses', 'destroy', 'reward-x'])
        assert result.exit_code == 0, result.output
        assert db.session.get(Bonus, bonus_id).deleted_at is not None

        listing = runner.invoke(args=['bonuses', 'list', '--with-deleted'])
        assert '[deleted]' in listing.output

        result = runner.invoke(args=['bonuses', 'restore', str(bonus_id)])
        assert result.exit_code == 0, result.output
        assert db.session.get(Bonus, bonus_id).deleted_at is None

    def test_update(self, app, sample_bonus):
        result = app.test_cli_runner().invoke(args=['bonuses', 'update', 'reward-x', '--points', '75'])
        assert result.exit_code == 0, result.output
        assert db.session.get(Bonus, sample_bonus.id).points == 75

    def test_purge(self, app, sample_bonus):
        bonus_id = sample_bonus.id
        result = app.test_cli_runner().invoke(args=['bonuses', 'purge', 'reward-x', '--yes'])
        assert result.exit_code == 0, result.output
        assert db.session.get(Bonus, bonus_id) is None

    def test_add_image(self, app, sample_bonus):
        result = app.test_cli_runner().invoke(
            args=['bonuses', 'add-image', 'reward-x', 'https://cdn.example.com/x.png']
        )
        assert result.exit_code == 0, result.output
        assert 'position 1' in result.output

    def test_missing_bonus(self, app):
        result = app.test_cli_runner().invoke(args=['bonuses', 'destroy', 'nope'])
        assert result.exit_code == 1

    def test_update_discontinue_on(self, app, sample_bonus):
        result = app.test_cli_runner().invoke(
            args=['bonuses', 'update', 'reward-x', '--discontinue-on', '2020-01-01T00:00:00']
        )
        assert result.exit_code == 0, result.output

        bonus = db.session.get(Bonus, sample_bonus.id)
        assert bonus.discontinue_on == datetime(2020, 1, 1)
        assert not bonus.is_available()

    def test_malformed_timestamp_is_usage_error(self, app):
        result = app.test_cli_runner().invoke(
            args=['bonuses', 'create', '--name', 'Mug', '--available-on', 'tomorrow']
        )
        assert result.exit_code == 2
        assert "'tomorrow' is not an ISO timestamp" in result.output
        assert Bonus.query.count() == 0
