"""End-to-end tests of the invocation boundary with a mocked HTTP session."""

import pytest

from iwextracts.datatypes import Extract, ExtractFormat, RenderHint
from iwextracts.errors import ExtractError
from iwextracts.extract import InterwikiExtractor, select_format
from iwextracts.messages import MESSAGES, render_message
from iwextracts.wiki_client import InterwikiClient

from tests.conftest import WIKIPEDIA_API, make_response


@pytest.fixture
def extractor(directory, session):
    return InterwikiExtractor(directory, client=InterwikiClient(session=session))


class TestSelectFormat:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("text", ExtractFormat.TEXT),
            ("WIKI", ExtractFormat.WIKI),
            ("Html", ExtractFormat.HTML),
            ("pdf", ExtractFormat.HTML),
            (True, ExtractFormat.HTML),
        ],
    )
    def test_select_format(self, value, expected):
        extract_format, rest = select_format({"format": value, "section": "1"}, ExtractFormat.HTML)
        assert extract_format is expected
        assert rest == {"section": "1"}

    def test_unknown_format_keeps_configured_default(self):
        extract_format, _ = select_format({"format": "pdf"}, ExtractFormat.TEXT)
        assert extract_format is ExtractFormat.TEXT


class TestInterwikiExtractor:
    def test_html_is_default(self, extractor, session):
        session.get.return_value = make_response({"parse": {"text": "<p>x</p>"}})

        result = extractor("Science")

        assert result == Extract(content="<p>x</p>", render_hint=RenderHint.HTML)
        args, kwargs = session.get.call_args
        assert args == (WIKIPEDIA_API,)
        assert kwargs["params"]["action"] == "parse"
        assert kwargs["params"]["page"] == "Science"

    def test_reserved_params_never_reach_the_query(self, extractor, session):
        session.get.return_value = make_response({"query": {"pages": [{"extract": "<p>a</p>"}]}})

        result = extractor(
            "Science", "api=https://x.example/w/api.php", "wiki=other", "format=TEXT", "chars=50"
        )

        assert result == "<p>a</p>"
        args, kwargs = session.get.call_args
        assert args == ("https://x.example/w/api.php",)
        assert kwargs["params"]["exchars"] == "50"
        for key in ("api", "wiki", "format"):
            assert key not in kwargs["params"]

    def test_default_title_used_when_title_empty(self, extractor, session):
        session.get.return_value = make_response({"parse": {"wikitext": "w"}})

        result = extractor("  ", "format=wiki", default_title="Host page")

        assert result == Extract(content="w", render_hint=RenderHint.WIKITEXT)
        _, kwargs = session.get.call_args
        assert kwargs["params"]["page"] == "Host page"

    def test_configured_default_format(self, directory, session):
        session.get.return_value = make_response({"query": {"pages": [{"extract": "t"}]}})
        extractor = InterwikiExtractor(
            directory, client=InterwikiClient(session=session), default_format="text"
        )
        assert extractor("Science") == "t"

    def test_no_api_renders_error_marker(self, extractor, session):
        result = extractor("Science", "wiki=unknown")

        assert result == (
            f'<span class="error">{MESSAGES["interwikiextracts-no-api"]}</span>'
        )
        session.get.assert_not_called()

    @pytest.mark.parametrize(
        "args,payload",
        [
            ((), {"parse": ["text"]}),
            ((), {"parse": {"text": 5}}),
            (("format=text",), {"query": ["x"]}),
            (("format=text", "paragraphs=2"), {"query": {"pages": [{"extract": None}]}}),
        ],
    )
    def test_malformed_response_renders_generic_marker(self, extractor, session, args, payload):
        session.get.return_value = make_response(payload)

        assert extractor("Science", *args) == (
            f'<span class="error">{MESSAGES["interwikiextracts-error"]}</span>'
        )

    def test_remote_error_uses_injected_renderer(self, directory, session):
        session.get.return_value = make_response({"error": {"code": "missingtitle"}})
        seen = []

        def render_error(name):
            seen.append(name)
            return "missing!"

        extractor = InterwikiExtractor(
            directory, client=InterwikiClient(session=session), render_error=render_error
        )

        assert extractor("Nope") == '<span class="error">missing!</span>'
        assert seen == ["interwikiextracts-missing-title"]

    def test_extract_raises(self, extractor, session):
        session.get.return_value = make_response({"error": {"code": "invalidsection"}})

        with pytest.raises(ExtractError) as excinfo:
            extractor.extract("Science", {"section": "99"})
        assert excinfo.value.key == "invalid-section"


class TestErrors:
    def test_default_key(self):
        assert ExtractError().key == "error"
        assert ExtractError().message_name == "interwikiextracts-error"

    def test_to_html(self):
        assert ExtractError("no-api").to_html(str.upper) == (
            '<span class="error">INTERWIKIEXTRACTS-NO-API</span>'
        )

    def test_every_key_has_a_message(self):
        from iwextracts.errors import ERROR_KEYS

        for key in ERROR_KEYS:
            assert ExtractError(key).message_name in MESSAGES

    def test_unknown_message_name(self):
        assert render_message("interwikiextracts-bogus") == "⧼interwikiextracts-bogus⧽"
