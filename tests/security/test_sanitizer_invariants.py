"""Invariants that must hold for every sanitizer output, checked over known XSS payloads."""

from bs4 import BeautifulSoup
import pytest

from cms_sanitizer import sanitize_html
from cms_sanitizer.security.policy import ALLOWED_TAGS, ALLOWED_SRC_PREFIXES

XSS_PAYLOADS = [
    "<script>alert(1)</script>",
    "<SCRIPT SRC=http://evil.example/xss.js></SCRIPT>",
    '<img src="x" onerror="alert(1)">',
    "<img src=x onerror=alert(1)//",
    '<IMG SRC="javascript:alert(1);">',
    "<IMG SRC=JaVaScRiPt:alert(1)>",
    '<IMG SRC="jav&#x09;ascript:alert(1);">',
    '<IMG SRC="jav&#x0A;ascript:alert(1);">',
    '<IMG SRC=" &#14;  javascript:alert(1);">',
    '<img src="data:image/svg+xml;base64,PHN2Zz4=">',
    '<a href="data:text/html;base64,PHNjcmlwdD5hbGVydCgxKTwvc2NyaXB0Pg==">x</a>',
    "<a href=\"java&#115;cript:alert('XSS')\">Click</a>",
    '<a href="&#106;&#97;&#118;&#97;&#115;&#99;&#114;&#105;&#112;&#116;&#58;alert(1)">x</a>',
    '<a href="vbscript:msgbox(1)">x</a>',
    '<a href="  javascript:alert(1)" onmouseover="alert(2)">x</a>',
    "<svg/onload=alert(1)>",
    "<svg><script>alert(1)</script></svg>",
    '<math><mtext><table><mglyph><style><img src=x onerror=alert(1)></style></mglyph></table></mtext></math>',
    "<body onload=alert(1)>",
    '<iframe src="javascript:alert(1)"></iframe>',
    '<div style="background:url(javascript:alert(1))">x</div>',
    '<div style="width: expression(alert(1))">x</div>',
    '<p style="x" ONCLICK="alert(1)" OnMouseOver="alert(2)">x</p>',
    "<b <script>alert(1)</script>>text</b>",
    '<a href="https://example.com"<img src=x onerror=alert(1)>>x</a>',
    '<noscript><p title="</noscript><img src=x onerror=alert(1)>"></noscript>',
    "<!--<img src=x onerror=alert(1)>-->",
    "<![CDATA[<script>alert(1)</script>]]>",
    '<table><td><a href="javascript:alert(1)">cell</a></td></table>',
    '<div><p title="a&quot; onclick=&quot;alert(1)">quoted</p></div>',
    '<a href="/x" title=\'" onfocus="alert(1)\'>y</a>',
    "<textarea><img src=x onerror=alert(1)></textarea>",
    '<object data="javascript:alert(1)"></object>',
    "<template><img src=x onerror=alert(1)></template>",
    "<p>" * 30 + "<img src=x onerror=alert(1)>" + "</p>" * 30,
]


def _parsed_output(html):
    return BeautifulSoup(sanitize_html(html), "html.parser")


def _assert_safe(soup):
    for tag in soup.find_all(True):
        assert tag.name in ALLOWED_TAGS
        for name, value in tag.attrs.items():
            assert not name.lower().startswith("on")
            normalized = value.strip().lower() if isinstance(value, str) else ""
            if name == "href":
                assert not normalized.startswith(("javascript:", "data:", "vbscript:"))
            if name == "src":
                assert normalized.startswith(ALLOWED_SRC_PREFIXES)


@pytest.mark.parametrize("payload", XSS_PAYLOADS)
def test_output_satisfies_invariants(payload):
    _assert_safe(_parsed_output(payload))


@pytest.mark.parametrize("payload", XSS_PAYLOADS)
def test_resanitized_output_satisfies_invariants(payload):
    once = sanitize_html(payload)
    _assert_safe(_parsed_output(once))


@pytest.mark.parametrize("payload", XSS_PAYLOADS)
def test_no_raw_script_tags(payload):
    assert "<script" not in sanitize_html(payload).lower()


def test_unicode_content_survives():
    html = "<p>Café – naïve résumé 🏉</p>"
    assert sanitize_html(html) == html
