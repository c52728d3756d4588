# librarian/sa/repositories/base.py
from typing import Iterable, List, Type, TypeVar
from sqlalchemy.orm import Session

T = TypeVar('T')

def clean_names(names: Iterable[str]) -> List[str]:
    """Strip names, drop empty ones and duplicates while keeping the order"""
    seen = set()
    cleaned = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.add(name)
            cleaned.append(name)
    return cleaned

def get_or_create_by_name(session: Session, model: Type[T], name: str) -> T:
    """Return the row of ``model`` called ``name``, inserting it if needed"""
    instance = session.query(model).filter(model.name == name).first()
    if not instance:
        instance = model(name=name)
        session.add(instance)
        session.flush()  # Need to flush to get the id
    return instance
