from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Profile


async def get_profile(session: AsyncSession, user_id: int) -> Profile | None:
    return await session.get(Profile, user_id)


async def create_profile(session: AsyncSession, **fields: Any) -> Profile:
    profile = Profile(**fields)
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile


async def update_profile(
    session: AsyncSession, user_id: int, **fields: Any
) -> Profile | None:
    """Обновляет поля профиля. Возвращает None, если профиль не найден."""
    profile = await session.get(Profile, user_id)
    if profile:
        for key, value in fields.items():
            setattr(profile, key, value)
        await session.commit()
        await session.refresh(profile)
    return profile
