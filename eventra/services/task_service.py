"""
Event task management
"""

import logging
from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session

from eventra.core.errors import NotFoundError
from eventra.models import Event, Task
from eventra.schemas.task import TaskCreate, TaskUpdate
from eventra.services.access_service import AccessService
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

# Fields only the event owner may change
OWNER_ONLY_FIELDS = ("assigned_to",)

class TaskService:
    """Service for task operations"""

    @staticmethod
    def list_tasks(db: Session, event_id: int) -> List[Task]:
        """Tasks ordered by due date, undated tasks last"""
        return db.query(Task).filter(Task.event_id == event_id).order_by(
            Task.due_date.is_(None),
            Task.due_date.asc(),
            Task.id.asc()
        ).all()

    @staticmethod
    def create_task(db: Session, event_id: int, task_data: TaskCreate) -> Task:
        task = Task(event_id=event_id, **task_data.model_dump())
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def get_task_for_user(db: Session, task_id: int, user: AuthUser) -> Tuple[Task, Event]:
        task = db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise NotFoundError("Task")

        try:
            event = AccessService.get_accessible_event(db, task.event_id, user)
        except NotFoundError:
            raise NotFoundError("Task")
        return task, event

    @staticmethod
    def update_task(db: Session, task: Task, task_update: TaskUpdate, is_owner: bool) -> Task:
        changes = task_update.model_dump(exclude_unset=True)
        if not is_owner:
            for field in OWNER_ONLY_FIELDS:
                if changes.pop(field, None) is not None:
                    logger.info(f"Ignoring {field} change on task {task.id} from non-owner")

        for field, value in changes.items():
            setattr(task, field, value)
        task.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def delete_task(db: Session, task: Task) -> None:
        db.delete(task)
        db.commit()
