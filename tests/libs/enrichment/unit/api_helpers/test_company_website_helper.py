from unittest.mock import AsyncMock, MagicMock

import pytest

from enrichment.api_helpers.company_website_helper import CompanyWebsiteResolver
from enrichment.api_helpers.provider_context import ProviderContext
from http_cache import ExpiringCache
from provider_payloads import make_cm, make_response


def _context() -> ProviderContext:
    return ProviderContext(
        name="wikidata",
        base_url="https://www.wikidata.org",
        limiter=AsyncMock(),
        cache=ExpiringCache(100, 86400, name="wikidata-cache"),
        cache_ttl_seconds=86400,
    )


def _entity(entity_id: str, website: str | None) -> dict:
    claims = {}
    if website is not None:
        claims["P856"] = [{"mainsnak": {"datavalue": {"value": website, "type": "string"}}}]
    return {"entities": {entity_id: {"id": entity_id, "claims": claims}}}


def _search(entity_id: str | None) -> dict:
    return {"search": [{"id": entity_id, "label": "Valve"}] if entity_id else []}


@pytest.mark.asyncio
async def test_resolves_official_website_in_two_requests(json_session):
    ctx = _context()
    session = json_session(_search("Q193559"), _entity("Q193559", "https://www.valvesoftware.com"))
    resolver = CompanyWebsiteResolver(session=session, context=ctx)

    website = await resolver.fetch("Valve")

    assert website == "https://www.valvesoftware.com"
    assert ctx.limiter.acquire.await_count == 2
    first_url = session.get.call_args_list[0].args[0]
    second_url = session.get.call_args_list[1].args[0]
    assert first_url == "https://www.wikidata.org/w/api.php"
    assert second_url == "https://www.wikidata.org/wiki/Special:EntityData/Q193559.json"


@pytest.mark.asyncio
async def test_cache_key_is_case_insensitive(json_session):
    ctx = _context()
    session = json_session(_search("Q1"), _entity("Q1", "https://example.com"))
    resolver = CompanyWebsiteResolver(session=session, context=ctx)

    await resolver.fetch("Valve")
    assert await resolver.fetch("  valve ") == "https://example.com"
    assert session.get.call_count == 2


@pytest.mark.asyncio
async def test_no_search_hit_returns_none_without_second_request(json_session):
    ctx = _context()
    session = json_session(_search(None))
    resolver = CompanyWebsiteResolver(session=session, context=ctx)

    assert await resolver.fetch("Nobody Studios") is None
    assert session.get.call_count == 1
    assert len(ctx.cache) == 0


@pytest.mark.asyncio
async def test_entity_without_website_claim_returns_none(json_session):
    resolver = CompanyWebsiteResolver(
        session=json_session(_search("Q2"), _entity("Q2", None)), context=_context()
    )
    assert await resolver.fetch("Indie") is None


@pytest.mark.asyncio
async def test_failed_entity_request_returns_none():
    session = MagicMock()
    session.get = MagicMock(
        side_effect=[
            make_cm(make_response(_search("Q3"))),
            make_cm(make_response(status=500)),
        ]
    )
    resolver = CompanyWebsiteResolver(session=session, context=_context())

    assert await resolver.fetch("Flaky") is None


@pytest.mark.asyncio
async def test_resolve_pair_reuses_lookup_for_same_company(json_session):
    session = json_session(_search("Q1"), _entity("Q1", "https://valve.example"))
    resolver = CompanyWebsiteResolver(session=session, context=_context())

    dev, pub = await resolver.resolve_pair("Valve", "valve")

    assert dev == pub == "https://valve.example"
    assert session.get.call_count == 2


@pytest.mark.asyncio
async def test_resolve_pair_skips_blank_names(json_session):
    session = json_session(_search("Q9"), _entity("Q9", "https://pub.example"))
    resolver = CompanyWebsiteResolver(session=session, context=_context())

    dev, pub = await resolver.resolve_pair("", "Publisher")

    assert dev is None
    assert pub == "https://pub.example"


@pytest.mark.asyncio
async def test_search_result_with_wrong_shape_returns_none(json_session):
    ctx = _context()
    session = json_session({"search": {"unexpected": 1}})
    resolver = CompanyWebsiteResolver(session=session, context=ctx)

    assert await resolver.fetch("Valve") is None
    assert session.get.call_count == 1
    assert len(ctx.cache) == 0


@pytest.mark.asyncio
async def test_non_object_search_result_returns_none(json_session):
    resolver = CompanyWebsiteResolver(session=json_session(["Q1"]), context=_context())
    assert await resolver.fetch("Valve") is None


@pytest.mark.asyncio
async def test_malformed_website_claim_returns_none(json_session):
    ctx = _context()
    entity = {"entities": {"Q5": {"claims": {"P856": [{"mainsnak": "oops"}]}}}}
    resolver = CompanyWebsiteResolver(
        session=json_session(_search("Q5"), entity), context=ctx
    )

    assert await resolver.fetch("Valve") is None
    assert len(ctx.cache) == 0


@pytest.mark.asyncio
async def test_malformed_claims_on_other_properties_are_ignored(json_session):
    entity = _entity("Q6", "https://studio.example")
    entity["entities"]["Q6"]["claims"]["P31"] = "not a claim list"
    resolver = CompanyWebsiteResolver(
        session=json_session(_search("Q6"), entity), context=_context()
    )

    assert await resolver.fetch("Studio") == "https://studio.example"


@pytest.mark.asyncio
async def test_entity_with_empty_claim_array_returns_none(json_session):
    entity = {"entities": {"Q7": {"id": "Q7", "claims": []}}}
    resolver = CompanyWebsiteResolver(
        session=json_session(_search("Q7"), entity), context=_context()
    )
    assert await resolver.fetch("Tiny") is None


@pytest.mark.asyncio
async def test_non_string_and_novalue_claims_are_skipped(json_session):
    entity = _entity("Q8", None)
    entity["entities"]["Q8"]["claims"]["P856"] = [
        {"mainsnak": {"snaktype": "novalue"}},
        {"mainsnak": {"datavalue": {"value": {"amount": "+1"}}}},
        {"mainsnak": {"datavalue": {"value": "  https://later.example  "}}},
    ]
    resolver = CompanyWebsiteResolver(
        session=json_session(_search("Q8"), entity), context=_context()
    )
    assert await resolver.fetch("Later") == "https://later.example"


@pytest.mark.asyncio
async def test_resolve_pair_keeps_sibling_when_one_payload_is_malformed():
    payloads = {
        "Broken Dev": {"search": {"unexpected": 1}},
        "Good Pub": _search("Q10"),
        "Q10": _entity("Q10", "https://pub.example"),
    }

    def _get(url, *, params=None, headers=None, timeout=None):
        if params is not None:
            return make_cm(make_response(payloads[params["search"]]))
        entity_id = url.rsplit("/", 1)[-1].removesuffix(".json")
        return make_cm(make_response(payloads[entity_id]))

    session = MagicMock()
    session.get = MagicMock(side_effect=_get)
    resolver = CompanyWebsiteResolver(session=session, context=_context())

    dev, pub = await resolver.resolve_pair("Broken Dev", "Good Pub")

    assert dev is None
    assert pub == "https://pub.example"
