import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from hyprline.models import Notification, NotificationUrgency
from hyprline.notification_repository import NotificationRepository, default_db_path

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make(id, seconds=0, **kwargs):
    return Notification(
        id=id,
        app_name=kwargs.pop("app_name", "app"),
        summary=kwargs.pop("summary", f"summary {id}"),
        body=kwargs.pop("body", "body"),
        timestamp=BASE + timedelta(seconds=seconds),
        **kwargs,
    )


@pytest.fixture
def repo(tmp_path):
    return NotificationRepository(tmp_path / "notifications.db")


def test_default_db_path_uses_xdg_data_home(tmp_path):
    path = default_db_path({"XDG_DATA_HOME": str(tmp_path)})
    assert path == tmp_path / "hyprline" / "notifications.db"
    assert path.parent.is_dir()


def test_default_db_path_falls_back_to_home(tmp_path):
    path = default_db_path({"HOME": str(tmp_path)})
    assert path == tmp_path / ".local" / "share" / "hyprline" / "notifications.db"


def test_default_db_path_without_home_raises():
    with pytest.raises(RuntimeError):
        default_db_path({})


def test_empty_repository(repo):
    assert repo.load_all() == []
    assert repo.get_max_id() == 0


def test_save_and_load_round_trip(repo):
    original = make(
        7,
        app_icon="icon",
        urgency=NotificationUrgency.CRITICAL,
        actions=["default", "Open"],
    )
    repo.save(original)
    assert repo.load_all() == [original]


def test_load_orders_newest_first(repo):
    repo.save(make(1, seconds=10))
    repo.save(make(2, seconds=30))
    repo.save(make(3, seconds=20))
    assert [n.id for n in repo.load_all()] == [2, 3, 1]


def test_load_is_limited_to_hundred(repo):
    for i in range(1, 106):
        repo.save(make(i, seconds=i))
    loaded = repo.load_all()
    assert len(loaded) == 100
    assert loaded[0].id == 105
    assert loaded[-1].id == 6


def test_duplicate_id_raises(repo):
    repo.save(make(1))
    with pytest.raises(sqlite3.IntegrityError):
        repo.save(make(1))


def test_delete_reports_rows(repo):
    repo.save(make(1))
    repo.save(make(2, seconds=1))
    assert repo.delete(1) == 1
    assert repo.delete(1) == 0
    assert [n.id for n in repo.load_all()] == [2]


def test_delete_all_reports_rows(repo):
    for i in range(1, 4):
        repo.save(make(i, seconds=i))
    assert repo.delete_all() == 3
    assert repo.load_all() == []
    assert repo.delete_all() == 0


def test_get_max_id(repo):
    repo.save(make(3))
    repo.save(make(11, seconds=1))
    repo.save(make(5, seconds=2))
    assert repo.get_max_id() == 11


def test_persists_across_instances(tmp_path):
    path = tmp_path / "n.db"
    NotificationRepository(path).save(make(4))
    assert [n.id for n in NotificationRepository(path).load_all()] == [4]


def test_unknown_urgency_and_bad_actions_are_tolerated(repo):
    with sqlite3.connect(repo.db_path) as conn:
        conn.execute(
            "INSERT INTO notifications VALUES (1, 'a', 's', 'b', '', 7, 100, 'not json')"
        )
    conn.close()
    (loaded,) = repo.load_all()
    assert loaded.urgency is NotificationUrgency.NORMAL
    assert loaded.actions == []


@pytest.mark.parametrize("urgency", list(NotificationUrgency))
def test_urgency_round_trip(repo, urgency):
    repo.save(make(1, urgency=urgency))
    assert repo.load_all()[0].urgency is urgency