"""Tests for the goals and tasks view-model."""
import pytest
import requests

from shared.enums import GoalType, RewardType
from src.ledger_app.services.errors import ServerError
from src.ledger_app.viewmodels.goals import GoalsViewModel

GOALS = {
    'goals': [
        {'id': 1, 'title': 'Read 20 books', 'status': 'active', 'goal_type': 'milestone',
         'milestone_target': 20, 'milestone_current': 4, 'progress': 20.7},
        {'id': 2, 'title': 'Plant a garden', 'status': 'completed', 'reward_type': 'outing'},
    ],
    'tasks': [
        {'id': 10, 'title': 'Buy seeds', 'status': 'open', 'goal_id': 2},
        {'id': 11, 'title': 'Library trip', 'status': 'completed', 'goal_id': 1},
        {'id': 12, 'title': 'Dig beds', 'status': 'in_progress'},
    ],
    'open_tasks_count': 2,
    'active_goals_count': 1,
}


@pytest.fixture
def vm(fake_api):
    return GoalsViewModel(fake_api)


class TestLoad:

    def test_load_goals_and_tasks(self, vm, fake_api):
        fake_api.on('GET', '/goals', GOALS)

        assert vm.load_goals().result() is True

        assert [g.title for g in vm.goals] == ['Read 20 books', 'Plant a garden']
        assert len(vm.tasks) == 3
        assert vm.open_tasks_count == 2
        assert vm.active_goals_count == 1
        assert vm.goals[0].progress == 20

    def test_load_failure(self, vm, fake_api):
        fake_api.fail('GET', '/goals', requests.exceptions.Timeout())
        assert vm.load_goals().result() is False
        assert vm.error_message == 'Failed to load goals'

    def test_malformed_goal(self, vm, fake_api):
        fake_api.on('GET', '/goals', {'goals': [{'id': 1}]})
        vm.load_goals()
        assert vm.error_message == 'Failed to parse goal data'

    def test_refresh_failure_is_silent(self, vm, fake_api):
        fake_api.on('GET', '/goals', GOALS)
        vm.load_goals()
        fake_api.fail('GET', '/goals', ServerError('down'))

        assert vm.refresh_goals().result() is False
        assert vm.error_message is None
        assert len(vm.goals) == 2

    def test_load_goal_detail(self, vm, fake_api):
        fake_api.on('GET', '/goals', GOALS)
        vm.load_goals()
        fake_api.on('GET', '/goals/1', {
            'goal': {'id': 1, 'title': 'Read 25 books', 'status': 'active'},
            'tasks': [{'id': 11, 'title': 'Library trip'}],
            'milestones': [{'id': 1, 'title': 'First ten', 'completed': False}],
        })

        vm.load_goal(1)

        assert vm.selected.title == 'Read 25 books'
        assert vm.goal_tasks[0].title == 'Library trip'
        assert vm.milestones[0].title == 'First ten'
        assert vm.goals[0].title == 'Read 25 books'


class TestQueries:

    @pytest.fixture(autouse=True)
    def loaded(self, vm, fake_api):
        fake_api.on('GET', '/goals', GOALS)
        vm.load_goals()

    def test_active_and_completed(self, vm):
        assert [g.id for g in vm.active_goals] == [1]
        assert [g.id for g in vm.completed_goals] == [2]

    def test_pending_tasks(self, vm):
        assert [t.id for t in vm.pending_tasks] == [10, 12]

    def test_labels(self, vm):
        assert vm.goals[0].goal_type_label == 'Milestone'
        assert vm.goals[1].goal_type_label == 'One-time'
        assert vm.goals[1].reward_label == 'Fun Outing'
        assert vm.goals[0].assignment_label == 'Entire Family'


class TestCreateGoal:

    def test_title_required(self, vm, fake_api):
        assert vm.create_goal().result() is False
        assert vm.error_message == 'Title is required'
        assert fake_api.calls == []

    def test_habit_sends_frequency_only(self, vm, fake_api):
        fake_api.on('POST', '/goals', {'goal': {'id': 3, 'title': 'Walk'}})
        fake_api.on('GET', '/goals', GOALS)
        vm.goal_form.title = 'Walk the dog'
        vm.goal_form.goal_type = GoalType.HABIT
        vm.goal_form.habit_frequency = 'weekly'
        vm.goal_form.milestone_target = '12'

        assert vm.create_goal().result() is True

        body = fake_api.body_for('POST', '/goals')
        assert body['goal_type'] == 'habit'
        assert body['habit_frequency'] == 'weekly'
        assert 'milestone_target' not in body
        assert 'reward_type' not in body
        assert vm.goal_form.title == ''
        assert vm.success_message == 'Goal created'

    def test_milestone_target_must_be_number(self, vm):
        vm.goal_form.title = 'Save up'
        vm.goal_form.goal_type = GoalType.MILESTONE
        vm.goal_form.milestone_target = 'lots'
        vm.create_goal()
        assert vm.error_message == 'Please enter a milestone target'

    def test_custom_reward(self, vm, fake_api):
        fake_api.on('POST', '/goals', {})
        fake_api.on('GET', '/goals', GOALS)
        vm.goal_form.title = 'Tidy room'
        vm.goal_form.rewards_enabled = True
        vm.goal_form.reward_type = RewardType.CUSTOM
        vm.goal_form.reward_custom = 'Movie night'

        vm.create_goal()

        body = fake_api.body_for('POST', '/goals')
        assert body['reward_type'] == 'custom'
        assert body['reward_custom'] == 'Movie night'

    def test_failure_includes_error(self, vm, fake_api):
        fake_api.fail('POST', '/goals', OSError('reset'))
        vm.goal_form.title = 'Run'
        vm.create_goal()
        assert vm.error_message == 'Failed to create goal: reset'


class TestGoalMutations:

    @pytest.fixture(autouse=True)
    def loaded(self, vm, fake_api):
        fake_api.on('GET', '/goals', GOALS)
        vm.load_goals()

    def test_delete_goal(self, vm, fake_api):
        fake_api.on('DELETE', '/goals/2')
        assert vm.delete_goal(2).result() is True
        assert [g.id for g in vm.goals] == [1]

    def test_complete_goal_reloads(self, vm, fake_api):
        fake_api.on('POST', '/goals/1/complete')
        fake_api.on('GET', '/goals/1', {'goal': {'id': 1, 'title': 'Read 20 books', 'status': 'completed'}})

        assert vm.complete_goal(1).result() is True

        assert vm.selected.status == 'completed'
        assert [g.id for g in vm.completed_goals] == [1, 2]

    def test_complete_goal_failure_is_silent(self, vm, fake_api):
        fake_api.fail('POST', '/goals/1/complete', ServerError('nope'))
        assert vm.complete_goal(1).result() is False
        assert vm.error_message is None

    def test_pause_and_resume(self, vm, fake_api):
        fake_api.on('POST', '/goals/1/pause')
        fake_api.on('POST', '/goals/1/resume')
        fake_api.on('GET', '/goals/1', {'goal': {'id': 1, 'title': 'Read 20 books', 'status': 'paused'}})
        vm.pause_goal(1)
        assert vm.selected.status == 'paused'
        vm.resume_goal(1)
        assert fake_api.paths('POST') == ['/goals/1/pause', '/goals/1/resume']


class TestTasks:

    @pytest.fixture(autouse=True)
    def loaded(self, vm, fake_api):
        fake_api.on('GET', '/goals', GOALS)
        vm.load_goals()

    def test_create_task_without_goal_never_counts(self, vm, fake_api):
        fake_api.on('POST', '/tasks', {})
        vm.task_form.title = 'Call plumber'
        vm.task_form.send_reminder = False

        assert vm.create_task().result() is True

        body = fake_api.body_for('POST', '/tasks')
        assert body['count_toward_goal'] is False
        assert 'recurrence_frequency' not in body
        assert 'reminder_type' not in body
        assert vm.task_form.title == ''

    def test_recurring_task_with_reminder(self, vm, fake_api):
        fake_api.on('POST', '/tasks', {})
        vm.task_form.title = 'Water plants'
        vm.task_form.goal_id = 2
        vm.task_form.is_recurring = True
        vm.task_form.recurrence_frequency = 'daily'
        vm.task_form.send_reminder = True

        vm.create_task()

        body = fake_api.body_for('POST', '/tasks')
        assert body['count_toward_goal'] is True
        assert body['recurrence_frequency'] == 'daily'
        assert body['recurrence_interval'] == 1
        assert body['reminder_type'] == 'push'

    def test_toggle_reloads_task(self, vm, fake_api):
        fake_api.on('POST', '/tasks/10/toggle')
        fake_api.on('GET', '/tasks/10', {'task': {'id': 10, 'title': 'Buy seeds', 'status': 'completed'}})

        assert vm.toggle_task(10).result() is True

        assert vm.selected_task.is_completed
        assert [t.id for t in vm.pending_tasks] == [12]

    def test_toggle_failure_is_silent(self, vm, fake_api):
        fake_api.fail('POST', '/tasks/10/toggle', ServerError('x'))
        vm.toggle_task(10)
        assert vm.error_message is None

    def test_load_task_failure(self, vm, fake_api):
        fake_api.fail('GET', '/tasks/99', RuntimeError())
        vm.load_task(99)
        assert vm.error_message == 'Failed to load task'

    def test_delete_task(self, vm, fake_api):
        fake_api.on('DELETE', '/tasks/12')
        vm.delete_task(12)
        assert [t.id for t in vm.tasks] == [10, 11]

    def test_delete_task_failure(self, vm, fake_api):
        fake_api.fail('DELETE', '/tasks/12', RuntimeError())
        vm.delete_task(12)
        assert vm.error_message == 'Failed to delete task'
        assert len(vm.tasks) == 3
