from datetime import timedelta

import pytest
from sqlalchemy import text

from studynotes.exceptions import ConflictError, NotFoundError
from studynotes.schemas import UserRegister, ProjectCreate, FileCreate, FileType
from studynotes.storage import MemoryStorage, DatabaseStorage
from studynotes.utils import get_current_timestamp


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Each storage test runs against both backends"""
    if request.param == "memory":
        backend = MemoryStorage(bcrypt_rounds=4)
        yield backend
        backend.clear()
    else:
        backend = DatabaseStorage(database_url="sqlite://", bcrypt_rounds=4)
        yield backend
        backend.dispose()


@pytest.fixture
def user(storage):
    return storage.create_user(UserRegister(username="alice", email="alice@x.com", password="secret1"))


@pytest.fixture
def project(storage, user):
    return storage.create_project(user.id, ProjectCreate(name="Biology 101", category="Science"))


def test_create_user_hashes_password(storage, user):
    assert user.password != "secret1"
    assert user.password.startswith("$2")
    assert user.preferred_model == "gpt-4"
    assert user.api_key is None


def test_validate_user(storage, user):
    assert storage.validate_user("alice@x.com", "secret1").id == user.id
    assert storage.validate_user("alice@x.com", "wrong-password") is None
    assert storage.validate_user("nobody@x.com", "secret1") is None


def test_lookup_missing_user(storage):
    assert storage.get_user("missing") is None
    assert storage.get_user_by_email("nobody@x.com") is None
    assert storage.get_user_by_username("nobody") is None


def test_lookup_user(storage, user):
    assert storage.get_user(user.id).email == "alice@x.com"
    assert storage.get_user_by_email("alice@x.com").id == user.id
    assert storage.get_user_by_username("alice").id == user.id


@pytest.mark.parametrize("username,email", [
    ("alice", "other@x.com"),
    ("other", "alice@x.com"),
])
def test_duplicate_user_conflicts(storage, user, username, email):
    with pytest.raises(ConflictError):
        storage.create_user(UserRegister(username=username, email=email, password="secret1"))


def test_update_user_profile(storage, user):
    updated = storage.update_user_profile(user.id, {"preferred_model": "claude"})
    assert updated.preferred_model == "claude"
    assert updated.updated_at >= user.updated_at
    assert storage.get_user(user.id).preferred_model == "claude"


def test_update_missing_user(storage):
    with pytest.raises(NotFoundError):
        storage.update_user_profile("missing", {"preferred_model": "claude"})


def test_create_project_starts_with_zero_counters(storage, project, user):
    assert project.user_id == user.id
    assert project.description is None
    assert (project.file_count, project.image_count, project.pdf_count, project.query_count) == (0, 0, 0, 0)
    assert project.last_accessed.tzinfo is not None


def test_get_projects_ordered_by_last_accessed(storage, user):
    names = ["First", "Second", "Third"]
    created = [storage.create_project(user.id, ProjectCreate(name=n, category="General")) for n in names]
    base = get_current_timestamp()
    # Second most recent, then First, then Third
    for project, offset in zip(created, [2, 3, 1]):
        storage.update_project(project.id, {"last_accessed": base + timedelta(minutes=offset)})
    
    assert [p.name for p in storage.get_projects(user.id)] == ["Second", "First", "Third"]


def test_get_projects_only_for_owner(storage, user, project):
    other = storage.create_user(UserRegister(username="bob", email="bob@x.com", password="secret2"))
    assert storage.get_projects(other.id) == []
    assert [p.id for p in storage.get_projects(user.id)] == [project.id]


def test_update_project(storage, project):
    updated = storage.update_project(project.id, {"name": "Biology 102"})
    assert updated.name == "Biology 102"
    assert updated.category == "Science"
    assert storage.get_project(project.id).name == "Biology 102"


@pytest.mark.parametrize("field", ["owner", "files", "metadata", "registry", "not_a_column"])
def test_update_project_unknown_field(storage, project, field):
    with pytest.raises(ValueError):
        storage.update_project(project.id, {field: "someone"})


def test_update_missing_project(storage):
    with pytest.raises(NotFoundError):
        storage.update_project("missing", {"name": "X"})


def test_add_file_recounts(storage, project):
    storage.add_file(project.id, FileCreate(name="notes.pdf", type=FileType.PDF))
    storage.add_file(project.id, FileCreate(name="cell.png", type=FileType.IMAGE, size=10))
    storage.add_file(project.id, FileCreate(name="summary.docx"))
    
    refreshed = storage.get_project(project.id)
    assert refreshed.file_count == 3
    assert refreshed.image_count == 1
    assert refreshed.pdf_count == 1
    assert len(storage.get_project_files(project.id)) == 3


def test_add_file_to_missing_project(storage):
    with pytest.raises(NotFoundError):
        storage.add_file("missing", FileCreate(name="notes.pdf", type=FileType.PDF))


def test_delete_file_recounts(storage, project):
    pdf = storage.add_file(project.id, FileCreate(name="notes.pdf", type=FileType.PDF))
    storage.add_file(project.id, FileCreate(name="cell.png", type=FileType.IMAGE))
    
    storage.delete_file(pdf.id)
    
    refreshed = storage.get_project(project.id)
    assert refreshed.file_count == 1
    assert refreshed.pdf_count == 0
    assert refreshed.image_count == 1
    assert storage.get_file(pdf.id) is None


def test_delete_missing_file_is_noop(storage, project):
    storage.delete_file("missing")
    assert storage.get_project(project.id).file_count == 0


def test_delete_project_cascades(storage, project):
    stored = storage.add_file(project.id, FileCreate(name="notes.pdf", type=FileType.PDF))
    
    storage.delete_project(project.id)
    
    assert storage.get_project(project.id) is None
    assert storage.get_project_files(project.id) == []
    assert storage.get_file(stored.id) is None


def test_delete_missing_project_is_noop(storage):
    storage.delete_project("missing")


def test_memory_storage_returns_copies(memory_storage):
    user = memory_storage.create_user(UserRegister(username="alice", email="alice@x.com", password="secret1"))
    project = memory_storage.create_project(user.id, ProjectCreate(name="Biology 101", category="Science"))
    project.name = "Mutated"
    assert memory_storage.get_project(project.id).name == "Biology 101"


def test_database_foreign_keys_cascade():
    """Deleting rows outside the ORM still removes dependent rows"""
    storage = DatabaseStorage(database_url="sqlite://", bcrypt_rounds=4)
    user = storage.create_user(UserRegister(username="alice", email="alice@x.com", password="secret1"))
    project = storage.create_project(user.id, ProjectCreate(name="Biology 101", category="Science"))
    stored = storage.add_file(project.id, FileCreate(name="notes.pdf", type=FileType.PDF))
    
    with storage._transaction() as db:
        db.execute(text("DELETE FROM users WHERE id = :id"), {"id": user.id})
    
    assert storage.get_project(project.id) is None
    assert storage.get_file(stored.id) is None
    storage.dispose()
