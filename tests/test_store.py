"""Tests for the high-level store operations against a fake transport."""

import pytest

from jsonapi_records import (
    AtomicOutcome,
    DocumentError,
    JSONAPIStore,
    Operation,
    Record,
    RecordNotFoundError,
    RelationshipDefinitionError,
    UnknownModelError,
)
from jsonapi_records.schemas import Document

USERS_DEFINITIONS = [
    {"type": "users", "relationships": {"posts": {"type": "posts", "kind": "has-many"}}},
    {"type": "posts", "relationships": {"author": {"type": "users", "kind": "belongs-to"}}},
]


@pytest.fixture
def kebab_store(fake_transport):
    return JSONAPIStore(
        {"endpoint": "https://api.example.com", "kebab_case": True},
        USERS_DEFINITIONS,
        transport=fake_transport,
    )


# ============================================================================
# READS
# ============================================================================


async def test_find_all_returns_document_and_records(kebab_store, fake_transport):
    fake_transport.document = {
        "data": [{"id": "1", "type": "users", "attributes": {"first-name": "John", "last-name": "Doe"}}]
    }
    document, users = await kebab_store.find_all("users", {"include": ["posts"]}, {"sort": "name"})

    assert document.resources[0].id == "1"
    assert users[0].firstName == "John"
    assert users[0].lastName == "Doe"
    assert fake_transport.calls == [
        ("fetch_document", ("users", None, {"include": ["posts"]}, {"sort": "name"}))
    ]


async def test_find_all_rejects_unknown_type_before_fetching(store, fake_transport):
    with pytest.raises(UnknownModelError):
        await store.find_all("widgets")
    assert fake_transport.calls == []


async def test_find_record_wires_included(store, fake_transport):
    fake_transport.document = {
        "data": {
            "id": "1",
            "type": "articles",
            "attributes": {"title": "T"},
            "relationships": {
                "author": {"data": {"type": "people", "id": "9"}},
                "comments": {"data": [{"type": "comments", "id": "5"}]},
            },
        },
        "included": [
            {"id": "9", "type": "people", "attributes": {"firstName": "Dan"}},
            {
                "id": "5",
                "type": "comments",
                "attributes": {"body": "First!"},
                "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
            },
        ],
    }
    article = await store.find_record("articles", "1")

    assert article.title == "T"
    assert article.author.firstName == "Dan"
    assert article.comments[0].author is article.author
    assert fake_transport.calls[0] == ("fetch_document", ("articles", "1", None, None))


@pytest.mark.parametrize("document", [{}, {"data": None}, {"data": []}])
async def test_find_record_raises_not_found_for_empty_data(store, fake_transport, document):
    fake_transport.document = document
    with pytest.raises(RecordNotFoundError, match="Record with id 1 not found") as excinfo:
        await store.find_record("articles", "1")
    assert excinfo.value.type_ == "articles"
    assert excinfo.value.id_ == "1"


async def test_find_related_has_many(kebab_store, fake_transport):
    fake_transport.document = {
        "data": [
            {"id": "1", "type": "posts", "attributes": {"title": "Post 1"}},
            {"id": "2", "type": "posts", "attributes": {"title": "Post 2"}},
        ]
    }
    user = kebab_store.create_record("users", id="1")
    document = await kebab_store.find_related(user, "posts")

    assert [post.id for post in user.posts] == ["1", "2"]
    assert user.posts[1].title == "Post 2"
    assert len(document.resources) == 2
    assert fake_transport.calls[0] == ("fetch_has_many", ("users", "1", "posts", None, None))


async def test_find_related_belongs_to(kebab_store, fake_transport):
    fake_transport.document = {
        "data": {"id": "1", "type": "users", "attributes": {"first-name": "Jane"}}
    }
    post = kebab_store.create_record("posts", id="1")
    await kebab_store.find_related(post, "author")

    assert post.author.id == "1"
    assert post.author.firstName == "Jane"
    assert fake_transport.calls[0][0] == "fetch_belongs_to"


async def test_find_related_belongs_to_null(kebab_store, fake_transport):
    fake_transport.document = {"data": None}
    post = kebab_store.create_record("posts", id="1")
    await kebab_store.find_related(post, "author")
    assert post.author is None


async def test_find_related_decodes_as_relationship_target(kebab_store, fake_transport):
    fake_transport.document = {
        "data": [{"id": "3", "type": "blog-posts", "attributes": {"title": "Post 3"}}]
    }
    user = kebab_store.create_record("users", id="1")
    await kebab_store.find_related(user, "posts")

    [post] = user.posts
    assert post.type == "posts"
    assert post.title == "Post 3"


async def test_find_related_requires_relationships(fake_transport):
    store = JSONAPIStore({"endpoint": "https://api.example.com"}, [{"type": "users"}], fake_transport)
    user = store.create_record("users", id="1")
    with pytest.raises(RelationshipDefinitionError, match="Model users has no relationships"):
        await store.find_related(user, "posts")
    assert fake_transport.calls == []


async def test_find_related_requires_declared_relationship(kebab_store, fake_transport):
    user = kebab_store.create_record("users", id="1")
    with pytest.raises(RelationshipDefinitionError, match="Relationship comments not defined"):
        await kebab_store.find_related(user, "comments")
    assert fake_transport.calls == []


# ============================================================================
# CREATE
# ============================================================================


def test_create_record_normalizes_kebab_case(kebab_store):
    user = kebab_store.create_record("users", {"first-name": "John", "last-name": "Doe"})
    assert user.firstName == "John"
    assert user.lastName == "Doe"
    assert user.type == "users"
    assert user.id


def test_create_record_keeps_given_ids(store):
    assert store.create_record("people", id="9").id == "9"
    draft = store.create_record("people", lid="local-1", firstName="John")
    assert draft.lid == "local-1"
    assert draft.id is None
    assert draft.firstName == "John"


def test_create_record_generates_unique_ids(store):
    assert store.create_record("tags").id != store.create_record("tags").id


def test_create_record_rejects_unknown_type(store):
    with pytest.raises(UnknownModelError, match="Model type unknown-type not defined"):
        store.create_record("unknown-type", {})


def test_records_from_document_accepts_plain_mappings(store):
    [tag] = store.records_from_document({"data": {"type": "tags", "id": "1", "attributes": {"name": "x"}}})
    assert tag.name == "x"


# ============================================================================
# WRITES
# ============================================================================


async def test_save_record_posts_resource_and_decodes_response(store, fake_transport):
    author = Record("people", id="9")
    article = store.create_record("articles", title="New", author=author)

    saved = await store.save_record(article)

    name, (resource, _) = fake_transport.calls[0]
    assert name == "post"
    assert resource.attributes == {"title": "New"}
    assert resource.relationships["author"].data.id == "9"
    assert saved is not article
    assert saved.id == "201"
    assert saved.title == "New"


async def test_save_record_requires_primary_data(store, fake_transport):
    async def empty_post(resource, options=None):
        return Document()

    fake_transport.post = empty_post
    with pytest.raises(DocumentError):
        await store.save_record(store.create_record("tags", name="x"))


async def test_save_atomic_references_local_ids(store, fake_transport):
    person = store.create_record("people", lid="local-1", firstName="John")
    article = store.create_record("articles", title="X", author=person)
    fake_transport.atomic_response = {
        "atomic:results": [
            {"data": {"type": "people", "id": "100", "attributes": {"firstName": "John"}}},
            {
                "data": {
                    "type": "articles",
                    "id": "101",
                    "attributes": {"title": "X"},
                    "relationships": {"author": {"data": {"type": "people", "id": "100"}}},
                }
            },
        ]
    }

    outcome = await store.save_atomic(
        [Operation(op="add", data=person), {"op": "add", "data": article}]
    )

    _, (request, _) = fake_transport.calls[0]
    wire = request.to_wire()
    first, second = wire["atomic:operations"]
    assert first["data"]["lid"] == "local-1"
    assert first["data"]["attributes"] == {"firstName": "John"}
    assert second["data"]["relationships"]["author"] == {"data": {"type": "people", "lid": "local-1"}}

    assert isinstance(outcome, AtomicOutcome)
    saved_person, saved_article = outcome.records
    assert saved_article.author is saved_person
    assert saved_person.id == "100"


async def test_save_atomic_no_content_is_none(store, fake_transport):
    tag = Record("tags", id="1", name="renamed")
    result = await store.save_atomic([Operation(op="update", data=tag)])
    assert result is None
    assert len(fake_transport.calls) == 1


async def test_save_atomic_with_ref_only(store, fake_transport):
    fake_transport.atomic_response = {
        "atomic:results": [{"data": {"id": "1", "type": "articles", "attributes": {"title": "Test Article"}}}]
    }
    outcome = await store.save_atomic(
        [{"op": "remove", "ref": {"type": "articles", "id": "1", "relationship": "author"}}]
    )
    _, (request, _) = fake_transport.calls[0]
    assert request.to_wire() == {
        "atomic:operations": [
            {"op": "remove", "ref": {"type": "articles", "id": "1", "relationship": "author"}}
        ]
    }
    assert outcome.records[0].title == "Test Article"


async def test_save_atomic_remove_record_uses_ref(store, fake_transport):
    fake_transport.atomic_response = {"atomic:results": [{}]}
    outcome = await store.save_atomic([Operation(op="remove", data=Record("tags", id="4"))])
    _, (request, _) = fake_transport.calls[0]
    assert request.to_wire()["atomic:operations"] == [{"op": "remove", "ref": {"type": "tags", "id": "4"}}]
    assert outcome.records == []


async def test_save_atomic_validates_before_sending(store, fake_transport):
    with pytest.raises(ValueError):
        await store.save_atomic([Operation(op="add")])
    with pytest.raises(UnknownModelError):
        await store.save_atomic([Operation(op="add", data=Record("widgets", id="1"))])
    assert fake_transport.calls == []


async def test_save_atomic_accepts_mapping_data(store, fake_transport):
    fake_transport.atomic_response = {
        "atomic:results": [
            {"data": {"type": "people", "id": "100", "lid": "local-1", "attributes": {"firstName": "John"}}}
        ]
    }

    outcome = await store.save_atomic(
        [{"op": "add", "data": {"lid": "local-1", "type": "people", "firstName": "John"}}],
        meta={"batch": "people"},
    )

    _, (request, _) = fake_transport.calls[0]
    wire = request.to_wire()
    [operation] = wire["atomic:operations"]
    assert operation["data"]["type"] == "people"
    assert operation["data"]["lid"] == "local-1"
    assert operation["data"]["attributes"] == {"firstName": "John"}
    assert wire["meta"] == {"batch": "people"}
    assert outcome.records[0].firstName == "John"


async def test_save_atomic_mapping_data_needs_type(store, fake_transport):
    with pytest.raises(TypeError, match="needs a 'type'"):
        await store.save_atomic([{"op": "add", "data": {"lid": "local-1", "firstName": "John"}}])
    assert fake_transport.calls == []
