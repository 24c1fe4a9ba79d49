from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from authapp.schemas.todo import TodoCreate, TodoUpdate, TodoOut
from authapp.schemas.auth import Message
from authapp.models.todo import Todo
from authapp.models.user import User
from authapp.database import get_db
from authapp.utils.auth import get_current_user, language_data
from authapp.language import get

from math import ceil

router = APIRouter(prefix="/api/todos", tags=["todos"])


def _owned_todo(todo_id: int, user: User, db: Session, lang: dict) -> Todo:
    todo = db.get(Todo, todo_id)
    if not todo:
        raise HTTPException(status_code=404, detail=get(lang, "common.todos.notFound"))
    if todo.owner_id != user.id:
        raise HTTPException(status_code=403, detail=get(lang, "common.todos.notAllowed"))
    return todo


@router.post("/", response_model=TodoOut, status_code=201)
def create_todo(todo: TodoCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    new = Todo(text=todo.text, completed=todo.completed, owner_id=user.id)
    db.add(new)
    db.commit()
    db.refresh(new)
    return new


@router.get("/")
def list_todos(q: Optional[str] = Query(None, description="Search by text"), completed: Optional[bool] = None, page: Optional[int] = None, limit: Optional[int] = None, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """If page and limit are provided, return paginated result dict {items,page,limit,total,pages}.
    Otherwise return plain list.
    """
    query = db.query(Todo).filter(Todo.owner_id == user.id)
    if q:
        query = query.filter(Todo.text.ilike(f"%{q}%"))
    if completed is not None:
        query = query.filter(Todo.completed == completed)
    query = query.order_by(Todo.id)
    if page is None or limit is None:
        return [TodoOut.from_orm(t) for t in query.all()]

    # normalize page/limit
    if page < 1:
        page = 1
    if limit < 1:
        limit = 10
    total = query.count()
    pages = ceil(total / limit) if total > 0 else 1
    items = query.limit(limit).offset((page - 1) * limit).all()
    return {"items": [TodoOut.from_orm(t) for t in items], "page": page, "limit": limit, "total": total, "pages": pages}


@router.get("/{todo_id}", response_model=TodoOut)
def read_todo(todo_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    return _owned_todo(todo_id, user, db, lang)


@router.patch("/{todo_id}", response_model=TodoOut)
def update_todo(todo_id: int, changes: TodoUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    todo = _owned_todo(todo_id, user, db, lang)
    if changes.text is not None:
        todo.text = changes.text
    if changes.completed is not None:
        todo.completed = changes.completed
    db.commit()
    db.refresh(todo)
    return todo


@router.delete("/{todo_id}", response_model=Message)
def delete_todo(todo_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db), lang: dict = Depends(language_data)):
    todo = _owned_todo(todo_id, user, db, lang)
    db.delete(todo)
    db.commit()
    return {"message": get(lang, "common.todos.deleted")}
