"""Unit tests for the note facade (core/services/note_service.py)."""

import uuid

import pytest

from src.noteful.core.exceptions import InvalidReference, MissingField, NotFound
from src.noteful.core.repositories import NoteRepository
from src.noteful.core.schemas.notes import NoteCreate, NoteUpdate
from src.noteful.core.services.note_service import NoteService
from src.noteful.core.services.ownership import OwnershipValidator


@pytest.fixture
def note_service(test_session, session_factory):
    return NoteService(test_session, validator=OwnershipValidator(session_factory))


class RecordingValidator:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def validate(self, owner_id, folder_id=None, tag_ids=None):
        self.calls.append((owner_id, folder_id, tag_ids))
        if self.error:
            raise self.error


async def test_create_with_folder_and_tags(note_service, test_user, make_folder, make_tag):
    folder = await make_folder(test_user)
    tag = await make_tag(test_user)

    note = await note_service.create_note(
        test_user.id,
        NoteCreate(title="Plan", content="Q4", folder_id=str(folder.id), tags=[str(tag.id)]),
    )

    assert note.title == "Plan"
    assert note.folder_id == folder.id
    assert [t.id for t in note.tags] == [tag.id]


async def test_create_requires_title(note_service, test_user):
    with pytest.raises(MissingField) as exc_info:
        await note_service.create_note(test_user.id, NoteCreate(content="no title"))

    assert exc_info.value.location == "title"
    assert exc_info.value.status_code == 400


async def test_create_with_foreign_folder_persists_nothing(
    note_service, test_session, test_user, other_user, make_folder
):
    foreign = await make_folder(other_user, "Theirs")

    with pytest.raises(InvalidReference):
        await note_service.create_note(
            test_user.id, NoteCreate(title="Sneaky", folder_id=str(foreign.id))
        )

    assert await NoteRepository(test_session).count(owner_id=test_user.id) == 0


async def test_create_with_one_foreign_tag_persists_nothing(
    note_service, test_session, test_user, other_user, make_tag
):
    mine = await make_tag(test_user, "a")
    theirs = await make_tag(other_user, "b")

    with pytest.raises(InvalidReference):
        await note_service.create_note(
            test_user.id, NoteCreate(title="Mixed", tags=[str(mine.id), str(theirs.id)])
        )

    assert await NoteRepository(test_session).count() == 0


async def test_create_treats_empty_folder_as_none(test_session, test_user):
    validator = RecordingValidator()
    service = NoteService(test_session, validator=validator)

    note = await service.create_note(test_user.id, NoteCreate(title="Loose", folder_id=""))

    assert note.folder_id is None
    assert validator.calls == [(test_user.id, None, None)]


async def test_get_is_owner_scoped(note_service, test_user, other_user, make_note):
    note = await make_note(other_user)

    with pytest.raises(NotFound):
        await note_service.get_note(note.id, test_user.id)
    assert (await note_service.get_note(str(note.id), other_user.id)).id == note.id


@pytest.mark.parametrize("bad_id", ["not-a-uuid", "123", str(uuid.uuid4())])
async def test_get_unknown_or_malformed_id(note_service, test_user, bad_id):
    with pytest.raises(NotFound):
        await note_service.get_note(bad_id, test_user.id)


async def test_update_applies_only_present_fields(note_service, test_user, make_note):
    note = await make_note(test_user, title="Original", content="keep me")

    updated = await note_service.update_note(note.id, test_user.id, NoteUpdate(title="Renamed"))

    assert updated.title == "Renamed"
    assert updated.content == "keep me"


async def test_update_empty_folder_unsets_it(note_service, test_user, make_folder, make_note):
    folder = await make_folder(test_user)
    note = await make_note(test_user, folder=folder)

    updated = await note_service.update_note(note.id, test_user.id, NoteUpdate(folder_id=""))

    assert updated.folder_id is None


async def test_update_null_folder_unsets_it(note_service, test_user, make_folder, make_note):
    folder = await make_folder(test_user)
    note = await make_note(test_user, folder=folder)

    request = NoteUpdate.model_validate({"folder_id": None})
    updated = await note_service.update_note(note.id, test_user.id, request)

    assert updated.folder_id is None


async def test_update_replaces_and_clears_tags(note_service, test_user, make_tag, make_note):
    a = await make_tag(test_user, "a")
    b = await make_tag(test_user, "b")
    note = await make_note(test_user, tags=[a])

    replaced = await note_service.update_note(note.id, test_user.id, NoteUpdate(tags=[str(b.id)]))
    assert [t.id for t in replaced.tags] == [b.id]

    cleared = await note_service.update_note(note.id, test_user.id, NoteUpdate(tags=[]))
    assert cleared.tags == []


async def test_update_null_tags_is_invalid(note_service, test_user, make_note):
    note = await make_note(test_user)

    with pytest.raises(InvalidReference) as exc_info:
        await note_service.update_note(
            note.id, test_user.id, NoteUpdate.model_validate({"tags": None})
        )

    assert exc_info.value.location == "tags"


async def test_update_blank_title_is_missing(note_service, test_user, make_note):
    note = await make_note(test_user)

    with pytest.raises(MissingField):
        await note_service.update_note(note.id, test_user.id, NoteUpdate(title=""))


async def test_update_with_foreign_tag_leaves_note_untouched(
    note_service, test_user, other_user, make_tag, make_note
):
    mine = await make_tag(test_user, "mine")
    theirs = await make_tag(other_user, "theirs")
    note = await make_note(test_user, title="Stable", tags=[mine])

    with pytest.raises(InvalidReference):
        await note_service.update_note(
            note.id, test_user.id, NoteUpdate(title="Changed", tags=[str(theirs.id)])
        )

    current = await note_service.get_note(note.id, test_user.id)
    assert current.title == "Stable"
    assert [t.id for t in current.tags] == [mine.id]


async def test_update_someone_elses_note(note_service, test_user, other_user, make_note):
    note = await make_note(other_user)

    with pytest.raises(NotFound):
        await note_service.update_note(note.id, test_user.id, NoteUpdate(title="Mine now"))


async def test_delete_then_delete_again(note_service, test_user, make_note):
    note = await make_note(test_user)

    await note_service.delete_note(note.id, test_user.id)

    with pytest.raises(NotFound):
        await note_service.delete_note(note.id, test_user.id)
    with pytest.raises(NotFound):
        await note_service.get_note(note.id, test_user.id)


async def test_delete_malformed_id(note_service, test_user):
    with pytest.raises(NotFound):
        await note_service.delete_note("garbage", test_user.id)


async def test_list_filters(note_service, test_user, other_user, make_folder, make_tag, make_note):
    folder = await make_folder(test_user)
    tag = await make_tag(test_user)
    filed = await make_note(test_user, title="the foobar", folder=folder)
    tagged = await make_note(test_user, title="bar", content="", tags=[tag])
    await make_note(other_user, title="foo elsewhere")

    by_term = await note_service.list_notes(test_user.id, search_term="Foo")
    assert [n.id for n in by_term] == [filed.id]

    by_folder = await note_service.list_notes(test_user.id, folder_id=str(folder.id))
    assert [n.id for n in by_folder] == [filed.id]

    by_tag = await note_service.list_notes(test_user.id, tag_id=str(tag.id))
    assert [n.id for n in by_tag] == [tagged.id]

    assert await note_service.list_notes(test_user.id, folder_id="junk") == []
    assert len(await note_service.list_notes(test_user.id)) == 2
