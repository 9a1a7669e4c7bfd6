"""Family goals and the tasks that feed them."""
from dataclasses import dataclass, field
from typing import List, Optional

from shared.enums import GoalStatus, GoalType, RewardType
from shared.schemas import (
    CreateGoalRequest, CreateTaskRequest, Goal, GoalDetailResponse, GoalsResponse, GoalTask,
    TaskDetailResponse,
)
from shared.validation import ValidationError, Validator
from ..services import endpoints
from .base import ResourceViewModel


@dataclass
class GoalForm:
    """Create-goal fields; type- and reward-specific fields are only sent when they apply."""
    title: str = ''
    description: str = ''
    category: Optional[str] = None
    goal_type: GoalType = GoalType.ONE_TIME
    habit_frequency: str = 'daily'
    milestone_target: str = ''
    milestone_unit: str = ''
    check_in_frequency: Optional[str] = None
    rewards_enabled: bool = False
    reward_type: RewardType = RewardType.STICKER
    reward_custom: str = ''
    is_kid_goal: bool = False
    visible_to_kids: bool = True
    kids_can_update: bool = False
    assignment_type: str = 'family'
    assigned_members: List[int] = field(default_factory=list)

    def to_request(self) -> CreateGoalRequest:
        title = Validator.validate_required(self.title.strip(), "Title")
        milestone_target = None
        milestone_unit = None
        if self.goal_type is GoalType.MILESTONE:
            try:
                milestone_target = int(self.milestone_target)
            except (TypeError, ValueError):
                raise ValidationError("Please enter a milestone target")
            milestone_unit = self.milestone_unit.strip() or None

        reward_type = None
        reward_custom = None
        if self.rewards_enabled:
            reward_type = self.reward_type
            if reward_type is RewardType.CUSTOM:
                reward_custom = self.reward_custom.strip() or None

        return CreateGoalRequest(
            title=title,
            description=self.description.strip() or None,
            category=self.category,
            goal_type=self.goal_type,
            habit_frequency=self.habit_frequency if self.goal_type is GoalType.HABIT else None,
            milestone_target=milestone_target,
            milestone_unit=milestone_unit,
            check_in_frequency=self.check_in_frequency,
            rewards_enabled=self.rewards_enabled,
            reward_type=reward_type,
            reward_custom=reward_custom,
            is_kid_goal=self.is_kid_goal,
            visible_to_kids=self.visible_to_kids if self.is_kid_goal else None,
            kids_can_update=self.kids_can_update if self.is_kid_goal else None,
            assignment_type=self.assignment_type,
            assigned_members=self.assigned_members or None,
        )


@dataclass
class TaskForm:
    title: str = ''
    description: str = ''
    category: Optional[str] = None
    priority: str = 'medium'
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    goal_id: Optional[int] = None
    count_toward_goal: bool = True
    assignees: List[int] = field(default_factory=list)
    is_recurring: bool = False
    recurrence_frequency: str = 'weekly'
    recurrence_interval: int = 1
    send_reminder: bool = False
    reminder_type: str = 'push'

    def to_request(self) -> CreateTaskRequest:
        title = Validator.validate_required(self.title.strip(), "Title")
        return CreateTaskRequest(
            title=title,
            description=self.description.strip() or None,
            category=self.category,
            priority=self.priority,
            due_date=self.due_date,
            due_time=self.due_time,
            goal_id=self.goal_id,
            count_toward_goal=self.count_toward_goal and self.goal_id is not None,
            assignees=self.assignees or None,
            is_recurring=self.is_recurring,
            recurrence_frequency=self.recurrence_frequency if self.is_recurring else None,
            recurrence_interval=self.recurrence_interval if self.is_recurring else None,
            send_reminder=self.send_reminder,
            reminder_type=self.reminder_type if self.send_reminder else None,
        )


class GoalsViewModel(ResourceViewModel):
    """Goals are ``items``; the tasks list sits beside them on the same screen."""

    parse_error_message = "Failed to parse goal data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.tasks: List[GoalTask] = []
        self.goal_tasks: List[GoalTask] = []
        self.milestones = []
        self.selected_task: Optional[GoalTask] = None
        self.open_tasks_count = 0
        self.active_goals_count = 0
        self.goal_form = GoalForm()
        self.task_form = TaskForm()

    @property
    def goals(self) -> List[Goal]:
        return self.items

    def _fetch_list(self):
        return self.api.request(endpoints.goals(), model=GoalsResponse)

    def _apply_list(self, response: GoalsResponse):
        self.items = response.goals or []
        self.tasks = response.tasks or []
        self.open_tasks_count = response.open_tasks_count or 0
        self.active_goals_count = response.active_goals_count or 0

    def load_goals(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load goals",
                             scope=scope, show_loading=not self.items and not self.tasks)

    def refresh_goals(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_goal(self, goal_id, scope=None):
        def fetch():
            return self.api.request(endpoints.goal(goal_id), model=GoalDetailResponse)

        def apply(response: GoalDetailResponse):
            self.selected = response.goal
            self.goal_tasks = response.tasks or []
            self.milestones = response.milestones or []
            self._replace_goal(response.goal)

        return self.run_load(fetch, apply, "Failed to load goal", scope=scope)

    def create_goal(self, scope=None):
        try:
            body = self.goal_form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_goal(), json=body)

        def apply(_):
            self.goal_form = GoalForm()
            self.load_goals(scope=scope)

        return self.run_mutation(fetch, apply, lambda e: f"Failed to create goal: {e}", scope=scope,
                                 success_message="Goal created")

    def delete_goal(self, goal_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_goal(goal_id))

        def apply(_):
            self.items = [g for g in self.items if g.id != goal_id]
            if self.selected is not None and self.selected.id == goal_id:
                self.selected = None
                self.goal_tasks = []
                self.milestones = []

        return self.run_mutation(fetch, apply, "Failed to delete goal", scope=scope)

    def complete_goal(self, goal_id, scope=None):
        return self._goal_action(endpoints.complete_goal(goal_id), goal_id, scope)

    def pause_goal(self, goal_id, scope=None):
        return self._goal_action(endpoints.pause_goal(goal_id), goal_id, scope)

    def resume_goal(self, goal_id, scope=None):
        return self._goal_action(endpoints.resume_goal(goal_id), goal_id, scope)

    def _goal_action(self, endpoint, goal_id, scope):
        """Status changes fail quietly and reload the goal when they succeed."""
        def fetch():
            self.api.request_empty(endpoint)

        def apply(_):
            self.load_goal(goal_id, scope=scope)

        return self.run_secondary(fetch, apply, scope=scope)

    def _replace_goal(self, goal: Goal):
        self.items = [goal if g == goal else g for g in self.items]

    # Tasks
    def load_task(self, task_id, scope=None):
        def fetch():
            return self.api.request(endpoints.task(task_id), model=TaskDetailResponse).task

        def apply(task):
            self.selected_task = task
            self._replace_task(task)

        return self.run_load(fetch, apply, "Failed to load task", scope=scope)

    def create_task(self, scope=None):
        try:
            body = self.task_form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_task(), json=body)

        def apply(_):
            self.task_form = TaskForm()
            self.load_goals(scope=scope)

        return self.run_mutation(fetch, apply, lambda e: f"Failed to create task: {e}", scope=scope,
                                 success_message="Task created")

    def toggle_task(self, task_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.toggle_task(task_id))

        def apply(_):
            self.load_task(task_id, scope=scope)

        return self.run_secondary(fetch, apply, scope=scope)

    def delete_task(self, task_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_task(task_id))

        def apply(_):
            self.tasks = [t for t in self.tasks if t.id != task_id]
            self.goal_tasks = [t for t in self.goal_tasks if t.id != task_id]
            if self.selected_task is not None and self.selected_task.id == task_id:
                self.selected_task = None

        return self.run_mutation(fetch, apply, "Failed to delete task", scope=scope)

    def _replace_task(self, task: GoalTask):
        self.tasks = [task if t == task else t for t in self.tasks]
        self.goal_tasks = [task if t == task else t for t in self.goal_tasks]

    # Local queries
    @property
    def active_goals(self) -> List[Goal]:
        return [g for g in self.items if g.status == GoalStatus.ACTIVE]

    @property
    def completed_goals(self) -> List[Goal]:
        return [g for g in self.items if g.status == GoalStatus.COMPLETED]

    @property
    def pending_tasks(self) -> List[GoalTask]:
        return [t for t in self.tasks if t.is_open]
