"""Repository behavior that depends on PostgreSQL semantics.

Run with ``pytest --run-integration``; needs Docker for Testcontainers.
"""

import pytest

from plaza.domain.social import DuplicateLikeError, Like, Post, PostTarget
from plaza.domain.user import EmailAlreadyExistsError, User
from plaza.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)


@pytest.mark.integration
class TestPostgresRepositories:
    @pytest.mark.asyncio
    async def test_unique_email(self, pg_session):
        repo = SQLAlchemyRepositoryFactory(pg_session).user_repository()
        await repo.save(User.create("kim@example.com", password_hash="h", name="Kim"))
        await pg_session.commit()

        with pytest.raises(EmailAlreadyExistsError):
            await repo.save(User.create("KIM@example.com", password_hash="h", name="K"))

    @pytest.mark.asyncio
    async def test_like_and_counter_in_one_transaction(self, pg_session):
        factory = SQLAlchemyRepositoryFactory(pg_session)
        user = User.create("kim@example.com", password_hash="h", name="Kim")
        await factory.user_repository().save(user)
        post = Post.create(user.id, "hello plaza")
        await factory.post_repository().save(post)
        await pg_session.commit()

        like_repo = factory.like_repository()
        await like_repo.add(Like(user_id=user.id, target=PostTarget(post.id)))
        assert await factory.post_repository().increment_like_count(post.id) == 1
        await pg_session.commit()

        with pytest.raises(DuplicateLikeError):
            await like_repo.add(Like(user_id=user.id, target=PostTarget(post.id)))

        assert await like_repo.exists(user.id, PostTarget(post.id))
        assert await factory.post_repository().decrement_like_count(post.id) == 0
        assert await factory.post_repository().decrement_like_count(post.id) == 0
