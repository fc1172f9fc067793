"""Fixtures for repository tests."""

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.models import Account, Message
from social_api.repositories import AccountRepository, BaseRepository, MessageRepository

# NOTE: All DB fixtures in this file depend on `db_session` (conftest.py).


@pytest.fixture
def faker() -> Faker:
    """
    A seeded Faker, so generated usernames and texts are reproducible across runs.
    `faker.unique` guarantees distinct usernames within one test.
    """
    fake = Faker()
    fake.seed_instance(1234)
    return fake


@pytest.fixture
def account_repository(db_session: AsyncSession) -> AccountRepository:
    return AccountRepository(db_session)


@pytest.fixture
def message_repository(db_session: AsyncSession) -> MessageRepository:
    return MessageRepository(db_session)


@pytest.fixture
def base_repo(db_session: AsyncSession) -> BaseRepository[Account]:
    """
    A BaseRepository configured for the Account model, for tests of the generic CRUD
    operations (save, get_by_id, get_all, update, delete, exists).
    """
    return BaseRepository(Account, db_session)


@pytest.fixture
def account_data(faker: Faker) -> dict[str, str]:
    """
    Sample payload for account creation. Kept synchronous because it does not touch the DB.
    """
    return {"username": faker.unique.user_name(), "password": faker.password(length=10)}


@pytest.fixture
def create_account(account_repository: AccountRepository, db_session: AsyncSession, faker: Faker):
    """
    Factory that persists (and commits) an account with optional overrides.

    Usage:
        account = await create_account(username="bob")
    """
    async def _create(**overrides) -> Account:
        data = {"username": faker.unique.user_name(), "password": faker.password(length=10)}
        data.update(overrides)
        account = await account_repository.save(Account(**data))
        await db_session.commit()
        return account

    return _create


@pytest.fixture
async def created_account(create_account, account_data) -> Account:
    return await create_account(**account_data)


@pytest.fixture
async def multiple_accounts(create_account) -> list[Account]:
    """Three accounts with unique usernames, in creation (id) order."""
    return [await create_account() for _ in range(3)]


@pytest.fixture
def create_message(message_repository: MessageRepository, db_session: AsyncSession, faker: Faker):
    """
    Factory that persists (and commits) a message for an account.

    Usage:
        message = await create_message(account, text="hi")
    """
    async def _create(account: Account, **overrides) -> Message:
        data = {
            "text": faker.sentence(nb_words=8),
            "posted_by": account.id,
            "time_posted": int(faker.unix_time()),
        }
        data.update(overrides)
        message = await message_repository.save(Message(**data))
        await db_session.commit()
        return message

    return _create


@pytest.fixture
async def created_message(create_message, created_account) -> Message:
    return await create_message(created_account)
