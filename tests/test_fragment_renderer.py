import unittest

from gift_lookup.models.enums import LookupStatus
from gift_lookup.models.lookup import GiftMessage, LookupOutcome
from gift_lookup.services.fragment_renderer import escape_html, render_fragment


UNESCAPE = [("&#39;", "'"), ("&quot;", '"'), ("&gt;", ">"), ("&lt;", "<"), ("&amp;", "&")]


def unescape(value):
    for escaped, raw in UNESCAPE:
        value = value.replace(escaped, raw)
    return value


class TestEscapeHtml(unittest.TestCase):
    def test_reserved_characters_escaped(self):
        self.assertEqual(
            escape_html("<script>&\"'</script>"),
            "&lt;script&gt;&amp;&quot;&#39;&lt;/script&gt;",
        )

    def test_escape_round_trip(self):
        original = "<script>&\"'</script>"
        escaped = escape_html(original)
        for ch in "<>\"'":
            self.assertNotIn(ch, escaped)
        self.assertEqual(unescape(escaped), original)


class TestRenderFragment(unittest.TestCase):
    def test_message_rendered_with_line_breaks(self):
        outcome = LookupOutcome.found(GiftMessage(present=True, text="Happy Birthday!\nLove, Sam"))

        html = render_fragment(outcome)

        self.assertIn("Gift message lookup", html)
        self.assertIn("Happy Birthday!<br>Love, Sam", html)
        self.assertIn("white-space:pre-wrap", html)

    def test_message_markup_never_inserted_raw(self):
        outcome = LookupOutcome.found(GiftMessage(present=True, text="<script>&\"'</script>"))

        html = render_fragment(outcome)

        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;&amp;&quot;&#39;&lt;/script&gt;", html)

    def test_placeholders_per_category(self):
        cases = [
            (LookupOutcome.bad_request(), "Please enter both last name and postcode."),
            (LookupOutcome.not_found(), "No gift message found for those details."),
            (LookupOutcome.found(GiftMessage(present=False)), "No gift message found for those details."),
            (LookupOutcome.upstream_error(503), "Shopify API error: 503"),
            (LookupOutcome.internal_error(), "Lookup failed. Please try again."),
        ]
        for outcome, sentence in cases:
            html = render_fragment(outcome)
            self.assertIn(sentence, html, outcome.status)
            self.assertIn("color:#666", html)
            self.assertNotIn("pre-wrap", html)

    def test_found_no_message_status(self):
        self.assertEqual(
            LookupOutcome.found(GiftMessage(present=True, text="")).status,
            LookupStatus.FOUND_NO_MESSAGE,
        )


if __name__ == '__main__':
    unittest.main()
