"""
프로필 서비스 단위 테스트
패치 문서 생성, 임베디드 목록 삽입/삭제, 업서트, 연쇄 삭제를 검증
"""

import asyncio

import pytest

from devconnector.models import Post, Profile
from devconnector.models.profile import Experience
from devconnector.schemas.profile import EducationCreate, ExperienceCreate, ProfileCreate
from devconnector.services import profile_service
from devconnector.utils.exceptions import NotFoundException, ProfileNotFoundException


def _experience(title: str) -> Experience:
    return Experience(title=title, company="ACME", from_date="2020-01-01T00:00:00")


class TestParsing:
    """요청 -> 패치 문서 변환"""

    def test_parse_skills_trims_each_item(self):
        assert profile_service.parse_skills("a, b ,c") == ["a", "b", "c"]

    def test_parse_skills_keeps_empty_segments(self):
        assert profile_service.parse_skills("python,,go") == ["python", "", "go"]

    def test_build_profile_fields_omits_missing_values(self):
        data = ProfileCreate(status="Developer", skills="python", company="", bio=None)

        fields = profile_service.build_profile_fields(data, "Test User")

        assert fields == {"name": "Test User", "status": "Developer", "skills": ["python"]}

    def test_build_profile_fields_patches_social_per_field(self):
        data = ProfileCreate(status="Developer", skills="python", twitter="@me", linkedin="in/me")

        fields = profile_service.build_profile_fields(data, "Test User")

        assert fields["social.twitter"] == "@me"
        assert fields["social.linkedin"] == "in/me"
        assert "social" not in fields
        assert "social.youtube" not in fields


class TestEntryLookup:
    """ID 로 항목 위치 찾기"""

    def test_find_entry_index(self):
        entries = [_experience("first"), _experience("second")]

        assert profile_service.find_entry_index(entries, str(entries[1].id)) == 1
        assert profile_service.find_entry_index(entries, "does-not-exist") == -1

    def test_matches_by_string_id_only(self):
        entries = [_experience("first")]

        assert profile_service.find_entry_index(entries, str(entries[0].id).upper()) == -1
        assert profile_service.find_entry_index([], "ffffffffffffffffffffffff") == -1


class TestUpsert:
    """프로필 업서트"""

    async def test_creates_profile_with_owner_name(self, context, test_user):
        data = ProfileCreate(status="Developer", skills="python, fastapi")

        result = await profile_service.upsert_profile(context, test_user.id, data)

        assert result.name == "Test User"
        assert result.skills == ["python", "fastapi"]
        assert result.user.id == test_user.id
        assert result.experience == []
        assert await Profile.find(Profile.user == test_user.id).count() == 1

    async def test_same_input_twice_is_idempotent(self, context, test_user):
        data = ProfileCreate(status="Developer", skills="python", company="ACME", youtube="yt")

        first = await profile_service.upsert_profile(context, test_user.id, data)
        second = await profile_service.upsert_profile(context, test_user.id, data)

        assert first.model_dump(exclude={"date"}) == second.model_dump(exclude={"date"})
        assert await Profile.find(Profile.user == test_user.id).count() == 1

    async def test_omitted_fields_are_kept(self, context, test_user):
        await profile_service.upsert_profile(
            context, test_user.id,
            ProfileCreate(status="Developer", skills="python", company="ACME", twitter="@me"),
        )

        result = await profile_service.upsert_profile(
            context, test_user.id,
            ProfileCreate(status="Senior Developer", skills="python", youtube="yt"),
        )

        assert result.status == "Senior Developer"
        assert result.company == "ACME"
        assert result.social.twitter == "@me"
        assert result.social.youtube == "yt"

    async def test_owner_name_is_refreshed(self, context, test_user):
        data = ProfileCreate(status="Developer", skills="python")
        await profile_service.upsert_profile(context, test_user.id, data)

        test_user.name = "Renamed User"
        await test_user.save()
        result = await profile_service.upsert_profile(context, test_user.id, data)

        assert result.name == "Renamed User"

    async def test_concurrent_first_submissions_create_one_profile(self, context, test_user):
        data = ProfileCreate(status="Developer", skills="python")

        await asyncio.gather(*[
            profile_service.upsert_profile(context, test_user.id, data) for _ in range(5)
        ])

        assert await Profile.find(Profile.user == test_user.id).count() == 1

    async def test_missing_user_is_not_found(self, context, test_user):
        await test_user.delete()

        with pytest.raises(NotFoundException):
            await profile_service.upsert_profile(
                context, test_user.id, ProfileCreate(status="Developer", skills="python")
            )


class TestEmbeddedEntries:
    """경력/학력 추가 및 삭제"""

    @pytest.fixture(autouse=True)
    async def profile(self, context, test_user):
        return await profile_service.upsert_profile(
            context, test_user.id, ProfileCreate(status="Developer", skills="python")
        )

    async def test_new_experience_goes_first(self, context, test_user):
        await profile_service.add_experience(
            context, test_user.id, ExperienceCreate(title="E1", company="A", from_date="2019-01-01")
        )
        result = await profile_service.add_experience(
            context, test_user.id, ExperienceCreate(title="E2", company="B", from_date="2021-01-01")
        )

        assert [entry.title for entry in result.experience] == ["E2", "E1"]
        assert result.experience[0].from_date.year == 2021

    async def test_remove_education_by_id(self, context, test_user):
        for school in ("S1", "S2", "S3"):
            result = await profile_service.add_education(
                context, test_user.id,
                EducationCreate(school=school, degree="BSc", fieldofstudy="CS", from_date="2015-09-01"),
            )
        target = result.education[1]

        result = await profile_service.remove_education(context, test_user.id, str(target.id))

        assert [entry.school for entry in result.education] == ["S3", "S1"]
        stored = await Profile.find_one(Profile.user == test_user.id)
        assert [entry.school for entry in stored.education] == ["S3", "S1"]

    async def test_remove_unknown_experience_returns_profile_unchanged(self, context, test_user):
        await profile_service.add_experience(
            context, test_user.id, ExperienceCreate(title="E1", company="A", from_date="2019-01-01")
        )

        result = await profile_service.remove_experience(context, test_user.id, "not-an-id")

        assert [entry.title for entry in result.experience] == ["E1"]

    async def test_concurrent_writes_keep_each_other(self, context, test_user):
        await asyncio.gather(
            profile_service.add_experience(
                context, test_user.id, ExperienceCreate(title="E1", company="A", from_date="2019-01-01")
            ),
            profile_service.add_experience(
                context, test_user.id, ExperienceCreate(title="E2", company="B", from_date="2020-01-01")
            ),
            profile_service.upsert_profile(
                context, test_user.id, ProfileCreate(status="Lead", skills="python")
            ),
        )

        stored = await Profile.find_one(Profile.user == test_user.id)
        assert sorted(entry.title for entry in stored.experience) == ["E1", "E2"]
        assert stored.status == "Lead"

    async def test_stale_snapshot_does_not_overwrite_entries(self, context, test_user):
        # 삭제 대상 위치를 찾은 뒤 다른 요청이 항목을 추가해도 그 항목은 남는다
        first = await profile_service.add_experience(
            context, test_user.id, ExperienceCreate(title="E1", company="A", from_date="2019-01-01")
        )
        stale = await Profile.find_one(Profile.user == test_user.id)
        await profile_service.add_experience(
            context, test_user.id, ExperienceCreate(title="E2", company="B", from_date="2020-01-01")
        )

        profile = await context.profiles.pull_entry(test_user.id, "experience", stale.experience[0].id)

        assert [entry.title for entry in profile.experience] == ["E2"]
        assert str(first.experience[0].id) not in [str(entry.id) for entry in profile.experience]

    async def test_entries_require_existing_profile(self, context, other_user):
        with pytest.raises(ProfileNotFoundException):
            await profile_service.add_experience(
                context, other_user.id, ExperienceCreate(title="E1", company="A", from_date="2019-01-01")
            )
        with pytest.raises(ProfileNotFoundException):
            await profile_service.remove_education(context, other_user.id, "0" * 24)


class TestLookup:
    """프로필 조회 및 populate"""

    async def test_list_profiles_attaches_owner(self, context, test_user, other_user):
        for user in (test_user, other_user):
            await profile_service.upsert_profile(
                context, user.id, ProfileCreate(status="Developer", skills="python")
            )

        profiles = await profile_service.list_profiles(context)

        owners = {profile.user.name: profile.user.avatar for profile in profiles}
        assert owners == {"Test User": "https://example.com/a.png", "Other User": None}

    async def test_malformed_user_id_is_not_found(self, context):
        with pytest.raises(ProfileNotFoundException):
            await profile_service.get_profile_by_user_id(context, "not-an-object-id")

    async def test_get_my_profile_without_profile(self, context, test_user):
        with pytest.raises(ProfileNotFoundException) as exc_info:
            await profile_service.get_my_profile(context, test_user.id)

        assert exc_info.value.detail == "There is no profile for this user"


class TestDeleteAccount:
    """계정 연쇄 삭제"""

    async def test_removes_posts_profile_and_user(self, context, test_user, other_user):
        await profile_service.upsert_profile(
            context, test_user.id, ProfileCreate(status="Developer", skills="python")
        )
        await Post(user=test_user.id, text="hello").insert()
        await Post(user=test_user.id, text="again").insert()
        await Post(user=other_user.id, text="keep me").insert()

        await profile_service.delete_account(context, test_user.id)

        assert await Post.find(Post.user == test_user.id).count() == 0
        assert await Profile.find(Profile.user == test_user.id).count() == 0
        assert await context.users.get(test_user.id) is None
        assert await Post.find(Post.user == other_user.id).count() == 1

    async def test_steps_run_in_order(self, context, test_user, monkeypatch):
        calls = []

        async def record(name, result):
            calls.append(name)
            return result

        monkeypatch.setattr(context.posts, "delete_by_owner", lambda user_id: record("posts", 0))
        monkeypatch.setattr(context.profiles, "delete_by_owner", lambda user_id: record("profile", True))
        monkeypatch.setattr(context.users, "delete", lambda user_id: record("user", True))

        await profile_service.delete_account(context, test_user.id)

        assert calls == ["posts", "profile", "user"]
