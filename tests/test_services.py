"""Сервисный слой без HTTP: транзакции, порядок проверок, побочные уведомления."""
from datetime import date, datetime, timedelta, timezone
import threading

import pytest

from coffeelog.core.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from coffeelog.db.repositories import NotificationRepository
from coffeelog.domains.coffee.schemas import CoffeeRecordCreate
from coffeelog.domains.coffee.services import CoffeeService
from coffeelog.domains.feed.schemas import PostCreate, PostUpdate
from coffeelog.domains.feed.services import FeedService
from coffeelog.domains.identity import entities as identity_entities
from coffeelog.domains.identity.schemas import UserCreate, UserLogin
from coffeelog.domains.identity.services import IdentityService
from coffeelog.domains.social.services import NotificationService, SocialService

from conftest import PASSWORD


async def make_user(session, email, name=None):
    return await IdentityService(session).register_user(UserCreate(email=email, password=PASSWORD, name=name))


async def test_register_and_login(session):
    service = IdentityService(session)
    user = await make_user(session, "user@example.com", "User")

    token, logged_in = await service.login_user(UserLogin(email="USER@example.com", password=PASSWORD))
    assert token
    assert logged_in.id == user.id
    assert logged_in.password_hash != PASSWORD

    with pytest.raises(ConflictError):
        await make_user(session, "user@example.com")

    with pytest.raises(UnauthorizedError) as wrong:
        await service.login_user(UserLogin(email="user@example.com", password="nope-nope"))
    with pytest.raises(UnauthorizedError) as unknown:
        await service.login_user(UserLogin(email="ghost@example.com", password=PASSWORD))
    assert wrong.value.message == unknown.value.message


async def test_like_and_notification_commit_together(session):
    author = await make_user(session, "author@example.com", "Author")
    fan = await make_user(session, "fan@example.com", "Fan")
    feed = FeedService(session)

    post = await feed.create_post(author.id, PostCreate(content="Pour over #v60"))
    assert post.hashtags == ["v60"]

    assert await feed.toggle_like(post.id, fan.id) == (True, 1)
    assert await feed.toggle_like(post.id, fan.id) == (False, 0)
    assert await feed.toggle_like(post.id, author.id) == (True, 1)

    repository = NotificationRepository(session)
    notifications = await repository.list_for_user(author.id)
    assert [notification.type for notification in notifications] == ["like"]
    assert await repository.count_for_user(fan.id) == 0


async def test_toggle_like_on_missing_post(session):
    user = await make_user(session, "user@example.com")
    with pytest.raises(NotFoundError):
        await FeedService(session).toggle_like(12345, user.id)


async def test_post_mutations_check_existence_then_ownership(session):
    owner = await make_user(session, "owner@example.com")
    stranger = await make_user(session, "stranger@example.com")
    feed = FeedService(session)
    post = await feed.create_post(owner.id, PostCreate(content="mine"))

    with pytest.raises(ForbiddenError):
        await feed.update_post(post.id, stranger.id, PostUpdate(content="theirs"))
    with pytest.raises(ForbiddenError):
        await feed.delete_post(post.id, stranger.id)
    with pytest.raises(NotFoundError):
        await feed.update_post(post.id + 100, stranger.id, PostUpdate(content="theirs"))

    updated = await feed.update_post(post.id, owner.id, PostUpdate(hashtags=["beans"]))
    assert updated.content == "mine"
    assert updated.hashtags == ["beans"]


async def test_comment_requires_post(session):
    user = await make_user(session, "user@example.com")
    with pytest.raises(NotFoundError):
        await FeedService(session).create_comment(999, user.id, "hello")


async def test_follow_rules(session):
    alice = await make_user(session, "alice@example.com", "Alice")
    bob = await make_user(session, "bob@example.com", "Bob")
    social = SocialService(session)

    with pytest.raises(ValidationError):
        await social.toggle_follow(alice.id, alice.id)

    assert await social.toggle_follow(alice.id, bob.id) is True
    assert await social.toggle_follow(alice.id, bob.id) is False
    assert await social.toggle_follow(alice.id, bob.id) is True

    page = await NotificationService(session).list_notifications(bob.id)
    assert [item.type for item in page.items] == ["follow", "follow"]
    assert page.has_more is False


async def test_mark_read_ordering(session):
    alice = await make_user(session, "alice@example.com")
    bob = await make_user(session, "bob@example.com")
    await SocialService(session).toggle_follow(alice.id, bob.id)

    notifications = NotificationService(session)
    notification = (await notifications.list_notifications(bob.id)).items[0]

    with pytest.raises(NotFoundError):
        await notifications.mark_read(notification.id + 1, alice.id)
    with pytest.raises(ForbiddenError):
        await notifications.mark_read(notification.id, alice.id)

    assert (await notifications.mark_read(notification.id, bob.id)).is_read is True
    assert await notifications.count_unread(bob.id) == 0


async def test_coffee_record_stored_in_utc(session):
    user = await make_user(session, "user@example.com")
    coffee = CoffeeService(session)

    record = await coffee.add_record(user.id, CoffeeRecordCreate(
        cups=1,
        timestamp=datetime(2024, 5, 1, 9, 0, tzinfo=timezone(timedelta(hours=9)))
    ))
    # Дата по умолчанию берётся из местного времени записи
    assert record.date == date(2024, 5, 1)
    assert record.timestamp_utc == datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc)

    stored = (await coffee.list_records(user.id, "2024-05"))[0]
    assert stored.timestamp_utc == datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc)


async def test_coffee_future_date_uses_local_today(session):
    user = await make_user(session, "user@example.com")
    coffee = CoffeeService(session)

    far_east_today = datetime.now(timezone(timedelta(hours=14))).date()
    # В UTC+14 этот день уже наступил, даже если в UTC ещё нет
    record = await coffee.add_record(user.id, CoffeeRecordCreate(
        cups=1, date=far_east_today, timezone="Pacific/Kiritimati"
    ))
    assert record.date == far_east_today

    with pytest.raises(ValidationError):
        await coffee.add_record(user.id, CoffeeRecordCreate(
            cups=1, date=far_east_today + timedelta(days=1), timezone="Pacific/Kiritimati"
        ))


async def test_delete_record_hides_foreign_records(session):
    owner = await make_user(session, "owner@example.com")
    other = await make_user(session, "other@example.com")
    coffee = CoffeeService(session)
    record = await coffee.add_record(owner.id, CoffeeRecordCreate(cups=2, date=date(2024, 1, 2)))

    with pytest.raises(NotFoundError) as foreign:
        await coffee.delete_record(record.id, other.id)
    with pytest.raises(NotFoundError) as missing:
        await coffee.delete_record(record.id + 1, other.id)
    assert foreign.value.message == missing.value.message

    await coffee.delete_record(record.id, owner.id)
    assert await coffee.list_records(owner.id) == []


async def test_password_hashing_runs_off_the_event_loop(session, monkeypatch):
    loop_thread = threading.get_ident()
    hashing_threads = []
    original = identity_entities.get_password_hash

    def recording_hash(password):
        hashing_threads.append(threading.get_ident())
        return original(password)

    monkeypatch.setattr(identity_entities, "get_password_hash", recording_hash)
    await make_user(session, "threaded@example.com")

    assert hashing_threads
    assert loop_thread not in hashing_threads
