"""
Tests for repositories of both storage backends
"""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from fintrack.core.errors import ConflictError, NotFoundError, ValidationError
from fintrack.domains.entities import UserUpdate
from tests.fakes import make_category, make_debit_expense, make_session, make_transference, make_user


async def store(uow_factory, repository_name, entity):
    async with uow_factory() as uow:
        await getattr(uow, repository_name).create(entity)
    return entity


async def load(uow_factory, repository_name, entity_id):
    async with uow_factory() as uow:
        return await getattr(uow, repository_name).find_by_id(entity_id)


class TestRepositoryCreate:
    """Creating entities"""

    @pytest.mark.asyncio
    async def test_create_and_find(self, uow_factory):
        """Stored entity is found by id with the same data"""
        user = await store(uow_factory, "users", make_user())

        found = await load(uow_factory, "users", user.id)

        assert found == user
        assert found.email == user.email
        assert found.password_hash == user.password_hash
        assert found.created_at == user.created_at

    @pytest.mark.asyncio
    async def test_create_duplicate_id_conflicts(self, uow_factory):
        """Second entity with the same id raises ConflictError"""
        user = await store(uow_factory, "users", make_user())

        with pytest.raises(ConflictError):
            async with uow_factory() as uow:
                await uow.users.create(user)

    @pytest.mark.asyncio
    async def test_create_duplicate_email_conflicts(self, uow_factory):
        """Emails are unique"""
        user = await store(uow_factory, "users", make_user())

        with pytest.raises(ConflictError):
            async with uow_factory() as uow:
                await uow.users.create(make_user(email=user.email))

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, uow_factory):
        """Absence is a normal result, not an error"""
        assert await load(uow_factory, "users", uuid4()) is None

    @pytest.mark.asyncio
    async def test_returned_entity_is_detached(self, uow_factory):
        """Mutating a found entity does not change the stored one"""
        user = await store(uow_factory, "users", make_user())

        async with uow_factory() as uow:
            found = await uow.users.find_by_id(user.id)
            found.name = "Mutated"
            again = await uow.users.find_by_id(user.id)

        assert again.name == user.name


class TestRepositoryUpdate:
    """Partial updates through repositories"""

    @pytest.mark.asyncio
    async def test_update_changes_given_fields(self, uow_factory):
        """Only the patched fields change, updated_at is refreshed"""
        user = await store(uow_factory, "users", make_user())

        async with uow_factory() as uow:
            await uow.users.update(user.id, {"name": "Jane Doe"})

        found = await load(uow_factory, "users", user.id)
        assert found.name == "Jane Doe"
        assert found.email == user.email
        assert found.updated_at is not None

    @pytest.mark.asyncio
    async def test_update_with_schema(self, uow_factory):
        """Patch may be given as an update schema"""
        user = await store(uow_factory, "users", make_user())

        async with uow_factory() as uow:
            await uow.users.update(user.id, UserUpdate(email="jane@example.com"))

        found = await load(uow_factory, "users", user.id)
        assert found.email == "jane@example.com"
        assert found.name == user.name

    @pytest.mark.asyncio
    async def test_empty_patch_is_noop(self, uow_factory):
        """Empty patch leaves the entity untouched"""
        user = await store(uow_factory, "users", make_user())

        async with uow_factory() as uow:
            await uow.users.update(user.id, {})

        found = await load(uow_factory, "users", user.id)
        assert found.updated_at is None

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, uow_factory):
        """Updating an absent entity raises NotFoundError"""
        with pytest.raises(NotFoundError):
            async with uow_factory() as uow:
                await uow.users.update(uuid4(), {"name": "Nobody"})

    @pytest.mark.asyncio
    async def test_empty_patch_on_missing_raises_not_found(self, uow_factory):
        """Existence is checked even for an empty patch"""
        with pytest.raises(NotFoundError):
            async with uow_factory() as uow:
                await uow.users.update(uuid4(), {})

    @pytest.mark.asyncio
    async def test_invalid_patch_raises_validation_error(self, uow_factory):
        """Invalid values are rejected before anything is written"""
        user = await store(uow_factory, "users", make_user())

        with pytest.raises(ValidationError):
            async with uow_factory() as uow:
                await uow.users.update(user.id, {"email": "broken"})

        found = await load(uow_factory, "users", user.id)
        assert found.email == user.email

    @pytest.mark.asyncio
    async def test_update_to_taken_email_conflicts(self, uow_factory):
        """Unique fields stay unique after updates"""
        first = await store(uow_factory, "users", make_user())
        second = await store(uow_factory, "users", make_user())

        with pytest.raises(ConflictError):
            async with uow_factory() as uow:
                await uow.users.update(second.id, {"email": first.email})


class TestRepositoryDelete:
    """Deleting entities"""

    @pytest.mark.asyncio
    async def test_delete(self, uow_factory):
        """Deleted entity is no longer found"""
        user = await store(uow_factory, "users", make_user())

        async with uow_factory() as uow:
            await uow.users.delete(user.id)

        assert await load(uow_factory, "users", user.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_idempotent(self, uow_factory):
        """Deleting an absent entity succeeds"""
        async with uow_factory() as uow:
            await uow.users.delete(uuid4())

    @pytest.mark.asyncio
    async def test_delete_twice(self, uow_factory):
        """Repeated delete of the same id succeeds"""
        category = await store(uow_factory, "transaction_categories", make_category())

        async with uow_factory() as uow:
            await uow.transaction_categories.delete(category.id)
            await uow.transaction_categories.delete(category.id)

        assert await load(uow_factory, "transaction_categories", category.id) is None


class TestSessionRepository:
    """Session lookups"""

    @pytest.mark.asyncio
    async def test_find_by_token(self, uow_factory):
        """Session is found by its token"""
        user = await store(uow_factory, "users", make_user())
        session = await store(uow_factory, "sessions", make_session(user.id))

        async with uow_factory() as uow:
            found = await uow.sessions.find_by_token(session.token)
            missing = await uow.sessions.find_by_token("0" * 128)

        assert found == session
        assert found.expires_at == session.expires_at
        assert missing is None

    @pytest.mark.asyncio
    async def test_find_many_by_user_id(self, uow_factory):
        """All sessions of a user are listed"""
        user = await store(uow_factory, "users", make_user())
        other = await store(uow_factory, "users", make_user())
        sessions = [
            await store(uow_factory, "sessions", make_session(user.id)),
            await store(uow_factory, "sessions", make_session(user.id)),
        ]
        await store(uow_factory, "sessions", make_session(other.id))

        async with uow_factory() as uow:
            found = await uow.sessions.find_many_by_user_id(user.id)

        assert set(found) == set(sessions)

    @pytest.mark.asyncio
    async def test_duplicate_token_conflicts(self, uow_factory):
        """Tokens are unique"""
        user = await store(uow_factory, "users", make_user())
        session = await store(uow_factory, "sessions", make_session(user.id))

        with pytest.raises(ConflictError):
            async with uow_factory() as uow:
                await uow.sessions.create(make_session(user.id, token=session.token))


class TestTransactionCategoryRepository:
    """Category visibility queries"""

    @pytest.mark.asyncio
    async def test_lists_global_and_own_categories(self, uow_factory):
        """User sees global categories and own ones, sorted by name"""
        user = await store(uow_factory, "users", make_user())
        other = await store(uow_factory, "users", make_user())
        rent = await store(uow_factory, "transaction_categories", make_category(name="rent"))
        food = await store(
            uow_factory, "transaction_categories", make_category(name="Food", user_id=user.id)
        )
        await store(uow_factory, "transaction_categories", make_category(name="Hobby", user_id=other.id))
        salary = await store(
            uow_factory, "transaction_categories", make_category(name="Salary", is_in_expense=False)
        )

        async with uow_factory() as uow:
            expenses = await uow.transaction_categories.find_many_from_user_of_expenses(user.id)
            earnings = await uow.transaction_categories.find_many_from_user_of_earnings(user.id)

        assert expenses == [food, rent]
        assert earnings == [salary]

    @pytest.mark.asyncio
    async def test_find_by_id_from_user(self, uow_factory):
        """Foreign categories are invisible"""
        user = await store(uow_factory, "users", make_user())
        other = await store(uow_factory, "users", make_user())
        category = await store(uow_factory, "transaction_categories", make_category(user_id=other.id))
        global_category = await store(uow_factory, "transaction_categories", make_category())

        async with uow_factory() as uow:
            foreign = await uow.transaction_categories.find_by_id_from_user(user.id, category.id)
            own = await uow.transaction_categories.find_by_id_from_user(other.id, category.id)
            shared = await uow.transaction_categories.find_by_id_from_user(user.id, global_category.id)

        assert foreign is None
        assert own == category
        assert shared == global_category


class TestTransactionRepositories:
    """Transaction persistence and recurrence queries"""

    @pytest.mark.asyncio
    async def test_debit_expense_roundtrip(self, uow_factory):
        """All transaction fields survive storage"""
        category = await store(uow_factory, "transaction_categories", make_category())
        transaction = await store(
            uow_factory,
            "debit_expense_transactions",
            make_debit_expense(category_id=category.id, recurrence_period="month", recurrence_limit=12)
        )

        found = await load(uow_factory, "debit_expense_transactions", transaction.id)

        assert found.amount == Decimal("49.90")
        assert found.transacted_at == date(2024, 3, 15)
        assert found.category_id == category.id
        assert found.recurrence_period == "month"
        assert found.recurrence_amount == 1
        assert found.recurrence_limit == 12
        assert found.is_accomplished is False

    @pytest.mark.asyncio
    async def test_accomplish_through_repository(self, uow_factory):
        """Domain changes are persisted with update"""
        category = await store(uow_factory, "transaction_categories", make_category())
        transaction = await store(
            uow_factory, "debit_expense_transactions", make_debit_expense(category_id=category.id)
        )

        async with uow_factory() as uow:
            found = await uow.debit_expense_transactions.find_by_id(transaction.id)
            await uow.debit_expense_transactions.update(found.id, found.accomplish())

        found = await load(uow_factory, "debit_expense_transactions", transaction.id)
        assert found.is_accomplished is True

    @pytest.mark.asyncio
    async def test_recurrence_queries(self, uow_factory):
        """Occurrences are listed by date and the latest one ends the recurrence"""
        origin = make_transference(recurrence_period="week")
        accounts = {
            "origin_bank_account_id": origin.origin_bank_account_id,
            "destiny_bank_account_id": origin.destiny_bank_account_id,
        }
        later = make_transference(
            origin_id=origin.id, transacted_at=origin.transacted_at + timedelta(weeks=2), **accounts
        )
        sooner = make_transference(
            origin_id=origin.id, transacted_at=origin.transacted_at + timedelta(weeks=1), **accounts
        )

        async with uow_factory() as uow:
            for transaction in (origin, later, sooner):
                await uow.transference_transactions.create(transaction)

        async with uow_factory() as uow:
            occurrences = await uow.transference_transactions.find_many_by_origin_id(origin.id)
            end = await uow.transference_transactions.find_end_of_recurrence(origin.id)
            missing = await uow.transference_transactions.find_end_of_recurrence(uuid4())

        assert occurrences == [sooner, later]
        assert end == later
        assert missing is None

    @pytest.mark.asyncio
    async def test_transference_update_keeps_accounts_distinct(self, uow_factory):
        """Invalid account patch is rejected"""
        transaction = await store(uow_factory, "transference_transactions", make_transference())

        with pytest.raises(ValidationError):
            async with uow_factory() as uow:
                await uow.transference_transactions.update(
                    transaction.id, {"destiny_bank_account_id": transaction.origin_bank_account_id}
                )


class TestRecoveryAfterDomainError:
    """Unit of work stays usable after a repository error"""

    @pytest.mark.asyncio
    async def test_create_after_conflict(self, uow_factory):
        """Conflict undoes only the failed write"""
        first = make_user()
        third = make_user()

        async with uow_factory() as uow:
            await uow.users.create(first)
            with pytest.raises(ConflictError):
                await uow.users.create(make_user(email=first.email))
            await uow.users.create(third)

        async with uow_factory() as uow:
            assert await uow.users.find_by_id(first.id) == first
            assert await uow.users.find_by_id(third.id) == third

    @pytest.mark.asyncio
    async def test_update_after_conflict(self, uow_factory):
        """Failed update keeps earlier and later writes of the same transaction"""
        first = await store(uow_factory, "users", make_user())
        second = await store(uow_factory, "users", make_user())

        async with uow_factory() as uow:
            await uow.users.update(first.id, {"name": "First Renamed"})
            with pytest.raises(ConflictError):
                await uow.users.update(second.id, {"email": first.email})
            await uow.users.update(second.id, {"name": "Second Renamed"})

        first_found = await load(uow_factory, "users", first.id)
        second_found = await load(uow_factory, "users", second.id)
        assert first_found.name == "First Renamed"
        assert second_found.name == "Second Renamed"
        assert second_found.email == second.email

    @pytest.mark.asyncio
    async def test_not_found_keeps_transaction(self, uow_factory):
        """Missing entity on update does not abort the transaction"""
        user = make_user()

        async with uow_factory() as uow:
            with pytest.raises(NotFoundError):
                await uow.users.update(uuid4(), {"name": "Nobody"})
            await uow.users.create(user)

        assert await load(uow_factory, "users", user.id) == user


class TestCollectionIsolation:
    """Writes touch only their own collection"""

    @pytest.mark.asyncio
    async def test_user_delete_keeps_sessions(self, uow_factory):
        """Deleting a user leaves its sessions in place"""
        user = await store(uow_factory, "users", make_user())
        session = await store(uow_factory, "sessions", make_session(user.id))
        category = await store(uow_factory, "transaction_categories", make_category(user_id=user.id))

        async with uow_factory() as uow:
            await uow.users.delete(user.id)

        assert await load(uow_factory, "sessions", session.id) == session
        assert await load(uow_factory, "transaction_categories", category.id) == category

    @pytest.mark.asyncio
    async def test_delete_referenced_category(self, uow_factory):
        """Category referenced by a transaction can still be deleted"""
        category = await store(uow_factory, "transaction_categories", make_category())
        transaction = await store(
            uow_factory, "debit_expense_transactions", make_debit_expense(category_id=category.id)
        )

        async with uow_factory() as uow:
            await uow.transaction_categories.delete(category.id)

        assert await load(uow_factory, "transaction_categories", category.id) is None
        assert await load(uow_factory, "debit_expense_transactions", transaction.id) == transaction


class TestDateTimeRoundtrip:
    """Timestamps are stored as naive UTC"""

    @pytest.mark.asyncio
    async def test_aware_datetime_patch(self, uow_factory):
        """Timezone-aware values come back as the same instant in naive UTC"""
        user = await store(uow_factory, "users", make_user())
        activated_at = datetime(2024, 5, 1, 15, 0, tzinfo=timezone(timedelta(hours=3)))

        async with uow_factory() as uow:
            await uow.users.update(user.id, {"activated_at": activated_at})

        found = await load(uow_factory, "users", user.id)
        assert found.activated_at == datetime(2024, 5, 1, 12, 0)

    @pytest.mark.asyncio
    async def test_session_expiration_patch(self, uow_factory):
        """Session expiration keeps its value through storage"""
        user = await store(uow_factory, "users", make_user())
        session = await store(uow_factory, "sessions", make_session(user.id))
        expires_at = datetime(2030, 1, 1, 9, 30, tzinfo=timezone.utc)

        async with uow_factory() as uow:
            await uow.sessions.update(session.id, {"expires_at": expires_at})

        found = await load(uow_factory, "sessions", session.id)
        assert found.expires_at == datetime(2030, 1, 1, 9, 30)
