"""Unit tests for matching filters against requests."""

from __future__ import annotations


class TestUrlFilterMatches:
    """Tests for URLFilter.matches."""

    def test_type_mask(self) -> None:
        """Test that the request type must overlap the filter's types."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.example.com^$script")
        request = URLRequest("https://ads.example.com/track.js", "news.org")
        assert f.matches(request, ContentType.SCRIPT)
        assert not f.matches(request, ContentType.IMAGE)
        assert f.matches(request, ContentType.IMAGE | ContentType.SCRIPT)

    def test_untyped_filter_skips_special_types(self) -> None:
        """Test that filters without a type don't match special requests."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.com^")
        request = URLRequest("https://ads.com/", "example.com")
        assert f.matches(request, ContentType.OTHER)
        assert not f.matches(request, ContentType.POPUP)
        assert not f.matches(request, ContentType.DOCUMENT)

    def test_popup(self) -> None:
        """Test a popup-only filter."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.com^$popup")
        request = URLRequest("https://ads.com/landing", "example.com")
        assert f.matches(request, ContentType.POPUP)
        assert not f.matches(request, ContentType.SUBDOCUMENT)

    def test_document_allowing(self) -> None:
        """Test a $document exception."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("@@||example.com^$document")
        request = URLRequest("https://example.com/page")
        assert f.matches(request, ContentType.DOCUMENT)
        assert not f.matches(request, ContentType.SCRIPT)

    def test_csp_is_context_only(self) -> None:
        """Test that the csp bit alone never selects a filter."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.com^$csp=script-src 'none'")
        request = URLRequest("https://ads.com/frame", "example.com")
        assert not f.matches(request, ContentType.CSP)
        assert f.matches(request, ContentType.SUBDOCUMENT | ContentType.CSP)

    def test_pattern_must_match(self) -> None:
        """Test that the pattern is checked last."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("/banner/*/img^")
        assert f.matches(URLRequest("https://example.com/banner/x/img?1"), ContentType.IMAGE)
        assert not f.matches(URLRequest("https://example.com/banner/x/gif"), ContentType.IMAGE)


class TestThirdParty:
    """Tests for $third-party matching."""

    def test_third_party(self) -> None:
        """Test that third-party filters skip first-party requests."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.example.com^$script,third-party")
        url = "https://ads.example.com/track.js"
        assert f.matches(URLRequest(url, "news.org"), ContentType.SCRIPT)
        assert not f.matches(URLRequest(url, "example.com"), ContentType.SCRIPT)

    def test_first_party(self) -> None:
        """Test that ~third-party filters skip third-party requests."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.example.com^$~third-party")
        url = "https://ads.example.com/track.js"
        assert not f.matches(URLRequest(url, "news.org"), ContentType.SCRIPT)
        assert f.matches(URLRequest(url, "example.com"), ContentType.SCRIPT)
        assert f.matches(URLRequest(url, "cdn.ads.example.com"), ContentType.SCRIPT)
        # Sibling subdomains are different parties
        assert not f.matches(URLRequest(url, "www.example.com"), ContentType.SCRIPT)

    def test_unknown_document_domain(self) -> None:
        """Test that the party check is skipped without a document domain."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("||ads.example.com^$third-party")
        assert f.matches(URLRequest("https://ads.example.com/x"), ContentType.SCRIPT)


class TestDomainActivation:
    """Tests for domain and sitekey restrictions."""

    def test_unrestricted(self) -> None:
        """Test that filters without restrictions are active everywhere."""
        from abprules.parser import parse_filter

        f = parse_filter("||ads.com^")
        assert f.is_active_on_domain("example.com")
        assert f.is_active_on_domain(None)
        assert f.is_generic()

    def test_most_specific_domain_wins(self) -> None:
        """Test include and exclude entries on nested domains."""
        from abprules.parser import parse_filter

        f = parse_filter("/ads/$domain=example.com|~shop.example.com")
        assert f.is_active_on_domain("example.com")
        assert f.is_active_on_domain("www.example.com")
        assert not f.is_active_on_domain("shop.example.com")
        assert not f.is_active_on_domain("cart.shop.example.com")
        assert not f.is_active_on_domain("other.org")
        assert not f.is_active_on_domain(None)
        assert not f.is_generic()

    def test_exclusion_only(self) -> None:
        """Test that an unmatched domain restriction leaves the filter inactive."""
        from abprules.parser import parse_filter

        f = parse_filter("/ads/$domain=~example.com")
        assert not f.is_active_on_domain("example.com")
        assert not f.is_active_on_domain("other.org")

    def test_domain_restriction_applies_to_matching(self) -> None:
        """Test that matches() checks the document domain."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("/ads/$domain=example.com")
        url = "https://cdn.net/ads/x.png"
        assert f.matches(URLRequest(url, "www.example.com"), ContentType.IMAGE)
        assert not f.matches(URLRequest(url, "other.org"), ContentType.IMAGE)

    def test_sitekey(self) -> None:
        """Test sitekey-only restrictions."""
        from abprules.parser import parse_filter

        f = parse_filter("/ads/$sitekey=abc|def")
        assert f.is_active_on_domain("example.com", "abc")
        assert f.is_active_on_domain("example.com", "def")
        assert not f.is_active_on_domain("example.com", "xyz")
        assert not f.is_generic()

    def test_sitekey_not_provided(self) -> None:
        """Test that a document without a sitekey doesn't deactivate the filter."""
        from abprules.parser import parse_filter

        f = parse_filter("/ads/$sitekey=abc|def")
        assert f.is_active_on_domain("example.com")
        assert f.is_active_on_domain(None)
        assert not f.is_generic()

    def test_domain_and_sitekey(self) -> None:
        """Test that a domain entry decides before the sitekey."""
        from abprules.parser import parse_filter

        f = parse_filter("/adserver/$domain=example.com,sitekey=abc")
        assert f.is_active_on_domain("example.com")
        assert f.is_active_on_domain("other.org", "abc")
        assert not f.is_active_on_domain("other.org")

    def test_sitekey_passed_to_matches(self) -> None:
        """Test the sitekey argument of matches()."""
        from abprules.content_types import ContentType
        from abprules.domains import URLRequest
        from abprules.parser import parse_filter

        f = parse_filter("/ads/$sitekey=abc")
        request = URLRequest("https://example.com/ads/x", "example.com")
        assert f.matches(request, ContentType.SCRIPT, "abc")
        assert not f.matches(request, ContentType.SCRIPT, "xyz")
        assert f.matches(request, ContentType.SCRIPT)

    def test_is_active_only_on_domain(self) -> None:
        """Test detection of filters restricted to one site."""
        from abprules.parser import parse_filter

        f = parse_filter("example.com,~shop.example.com##.ad-banner")
        assert f.is_active_only_on_domain("example.com")
        assert f.is_active_only_on_domain("www.example.com")
        assert not f.is_active_only_on_domain("shop.example.com")
        assert not f.is_active_only_on_domain("other.org")
        assert not parse_filter("##.ad-banner").is_active_only_on_domain("example.com")

    def test_content_filter_activation(self) -> None:
        """Test activation of hiding filters."""
        from abprules.parser import parse_filter

        generic = parse_filter("##.ad-banner")
        assert generic.is_generic()
        assert generic.is_active_on_domain("example.com")

        specific = parse_filter("example.com##.ad-banner")
        assert not specific.is_generic()
        assert specific.is_active_on_domain("www.example.com")
        assert not specific.is_active_on_domain("other.org")


class TestRewrite:
    """Tests for $rewrite resources."""

    def test_rewrite_url(self) -> None:
        """Test that rewrite filters map to a replacement URL."""
        from abprules.parser import parse_filter
        from abprules.resources import get_rewrite_resource

        f = parse_filter("||ads.com/x.js$rewrite=abp-resource:blank-js")
        assert f.rewrite_url("https://ads.com/x.js") == "data:application/javascript,"
        assert get_rewrite_resource("blank-txt") == get_rewrite_resource("blank-text")

    def test_unknown_resource_keeps_url(self) -> None:
        """Test that unknown resources and plain filters leave the URL alone."""
        from abprules.parser import parse_filter

        unknown = parse_filter("||ads.com/x.js$rewrite=abp-resource:nope")
        assert unknown.rewrite_url("https://ads.com/x.js") == "https://ads.com/x.js"

        plain = parse_filter("||ads.com/x.js")
        assert plain.rewrite_url("https://ads.com/x.js") == "https://ads.com/x.js"

    def test_header_filter_is_privileged(self) -> None:
        """Test that header filters need a privileged subscription."""
        from abprules.parser import parse_filter

        assert parse_filter("||ads.com^$header=x-ad").requires_privileged_subscription
        assert not parse_filter("||ads.com^").requires_privileged_subscription
