import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from app.core.exceptions import AlreadyExistsError, NotEmptyError, NotFoundError
from app.features.access_rights.policy import default_permission
from app.features.groups.models import Group
from app.features.groups.schemas import GroupRequest
from tests.utils import count_access_rights, create_group, create_user


async def _count_groups(db) -> int:
    result = await db.execute(select(func.count(Group.id)))
    return result.scalar() or 0


@pytest.mark.asyncio
async def test_create_group_seeds_default_access_rights(db_session, group_service, catalog):
    group = await group_service.create_group(GroupRequest(name="Formateur"), company_id=1)

    assert group.id is not None
    assert group.company_id == 1
    assert group.description == "Formateur"
    assert await count_access_rights(db_session, group.id) == len(list(catalog.pairs()))

    rights = await group_service.access_rights.get_group_access_rights(group.id, "evaluations")
    assert all(
        item.allowed is default_permission("Formateur", "evaluations", item.action)
        for item in rights.access_rights
    )


@pytest.mark.asyncio
async def test_create_group_keeps_explicit_description(group_service):
    group = await group_service.create_group(
        GroupRequest(name="Tuteurs", description="Tuteurs des alternants"), company_id=1,
    )

    assert group.description == "Tuteurs des alternants"


@pytest.mark.asyncio
async def test_create_duplicate_name_in_same_company_fails(db_session, group_service):
    await group_service.create_group(GroupRequest(name="Manager"), company_id=1)
    groups_before = await _count_groups(db_session)

    with pytest.raises(AlreadyExistsError):
        await group_service.create_group(GroupRequest(name="Manager"), company_id=1)

    assert await _count_groups(db_session) == groups_before


@pytest.mark.asyncio
async def test_same_name_allowed_in_another_company(group_service):
    first = await group_service.create_group(GroupRequest(name="Admin"), company_id=1)
    second = await group_service.create_group(GroupRequest(name="Admin"), company_id=2)

    assert first.id != second.id


@pytest.mark.asyncio
async def test_rename_group(group_service):
    group = await group_service.create_group(GroupRequest(name="Formateurs"), company_id=1)

    renamed = await group_service.rename_group(group.id, GroupRequest(name="Formateur"))

    assert renamed.name == "Formateur"
    assert renamed.description == "Formateur"


@pytest.mark.asyncio
async def test_rename_keeps_explicit_description(group_service):
    group = await group_service.create_group(GroupRequest(name="Formateurs"), company_id=1)

    renamed = await group_service.rename_group(
        group.id, GroupRequest(name="Formateur", description="Formateurs internes"),
    )

    assert renamed.name == "Formateur"
    assert renamed.description == "Formateurs internes"


@pytest.mark.asyncio
async def test_group_name_is_stripped_before_defaults_apply(db_session, group_service):
    group = await group_service.create_group(GroupRequest(name="  Admin "), company_id=1)

    assert group.name == "Admin"
    assert group.description == "Admin"
    rights = await group_service.access_rights.get_group_access_rights(group.id, "settings")
    assert all(item.allowed for item in rights.access_rights)


@pytest.mark.asyncio
async def test_padded_name_collides_with_existing_group(group_service):
    await group_service.create_group(GroupRequest(name="Manager"), company_id=1)

    with pytest.raises(AlreadyExistsError):
        await group_service.create_group(GroupRequest(name=" Manager "), company_id=1)


def test_blank_group_name_is_rejected():
    with pytest.raises(ValidationError):
        GroupRequest(name="   ")


@pytest.mark.asyncio
async def test_rename_to_own_name_is_allowed(group_service):
    group = await group_service.create_group(GroupRequest(name="Manager"), company_id=1)

    renamed = await group_service.rename_group(group.id, GroupRequest(name="Manager"))

    assert renamed.id == group.id


@pytest.mark.asyncio
async def test_rename_collision_is_checked_across_companies(group_service):
    await group_service.create_group(GroupRequest(name="Manager"), company_id=2)
    group = await group_service.create_group(GroupRequest(name="Managers"), company_id=1)

    with pytest.raises(AlreadyExistsError):
        await group_service.rename_group(group.id, GroupRequest(name="Manager"))


@pytest.mark.asyncio
async def test_rename_missing_group(group_service):
    with pytest.raises(NotFoundError):
        await group_service.rename_group(123, GroupRequest(name="Manager"))


@pytest.mark.asyncio
async def test_delete_empty_group_removes_access_rights(db_session, group_service):
    group = await group_service.create_group(GroupRequest(name="Temporaire"), company_id=1)
    group_id = group.id

    await group_service.delete_group(group_id)

    assert await db_session.get(Group, group_id) is None
    assert await count_access_rights(db_session, group_id) == 0


@pytest.mark.asyncio
async def test_delete_group_with_users_fails_without_deleting(db_session, group_service, catalog):
    group = await group_service.create_group(GroupRequest(name="Manager"), company_id=1)
    await create_user(db_session, "m@example.com", "Manager", group)

    with pytest.raises(NotEmptyError) as excinfo:
        await group_service.delete_group(group.id)

    assert excinfo.value.details == {"member_count": 1}
    assert await _count_groups(db_session) == 1
    assert await count_access_rights(db_session, group.id) == len(list(catalog.pairs()))


@pytest.mark.asyncio
async def test_delete_missing_group(group_service):
    with pytest.raises(NotFoundError):
        await group_service.delete_group(77)


@pytest.mark.asyncio
async def test_list_groups_counts_users_per_company(db_session, group_service):
    admin = await create_group(db_session, "Admin")
    manager = await create_group(db_session, "Manager")
    await create_group(db_session, "Admin", company_id=2)
    await create_user(db_session, "a@example.com", "Admin", admin)
    await create_user(db_session, "m1@example.com", "Manager", manager)
    await create_user(db_session, "m2@example.com", "Manager", manager)

    groups = await group_service.list_groups(1)

    assert [(g.name, g.user_count) for g in groups] == [("Admin", 1), ("Manager", 2)]
