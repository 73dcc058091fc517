"""
Task API routes - requires authentication
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from eventra.core.db import get_db
from eventra.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from eventra.services.access_service import AccessService
from eventra.services.realtime_service import broadcaster
from eventra.services.task_service import TaskService
from eventra.utils.responses import serialize, serialize_many, success_response
from eventra.utils.security import AuthUser, get_current_user

router = APIRouter()

@router.get("/events/{event_id}/tasks")
async def list_tasks(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Tasks of an event, earliest due date first"""
    event = AccessService.get_accessible_event(db, event_id, user)
    tasks = TaskService.list_tasks(db, event.id)
    return success_response(message="Tasks retrieved", data=serialize_many(TaskResponse, tasks))

@router.post("/events/{event_id}/tasks")
async def create_task(
    event_id: int,
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    task = TaskService.create_task(db, event.id, task_data)

    data = serialize(TaskResponse, task)
    await broadcaster.task_created(event.id, data)

    return success_response(message="Task created successfully", data=data, status_code=201)

@router.get("/tasks/{task_id}")
async def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    task, _ = TaskService.get_task_for_user(db, task_id, user)
    return success_response(message="Task retrieved", data=serialize(TaskResponse, task))

@router.put("/tasks/{task_id}")
async def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    task, event = TaskService.get_task_for_user(db, task_id, user)
    task = TaskService.update_task(db, task, task_update, is_owner=AccessService.is_owner(event, user))

    data = serialize(TaskResponse, task)
    await broadcaster.task_updated(event.id, data)

    return success_response(message="Task updated successfully", data=data)

@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    task, event = TaskService.get_task_for_user(db, task_id, user)
    TaskService.delete_task(db, task)
    await broadcaster.task_deleted(event.id, task_id)
    return Response(status_code=204)
