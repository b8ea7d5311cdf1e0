"""Tests for HTML and Markdown text utilities."""

from wikicontext.ingestion.text import html_to_text, looks_like_html, render_markdown


class TestHtmlToText:
    def test_strips_boilerplate(self):
        html = """
        <html><head><style>body { color: red; }</style>
        <script>var tracking = 1;</script></head>
        <body>
          <header>Site Header</header>
          <nav>Home | Docs</nav>
          <main><h1>Install</h1><p>Run   the   installer.</p></main>
          <aside>Related links</aside>
          <!-- hidden comment -->
          <footer>Copyright</footer>
        </body></html>
        """

        text = html_to_text(html)

        assert text == "Install Run the installer."

    def test_unescapes_entities(self):
        assert html_to_text("<p>a &amp;&amp; b &lt; c</p>") == "a && b < c"

    def test_escaped_markup_is_decoded_once(self):
        text = html_to_text("<p>Write &amp;lt;br&amp;gt; literally</p>")

        assert text == "Write &lt;br&gt; literally"

    def test_empty(self):
        assert html_to_text("") == ""


class TestLooksLikeHtml:
    def test_doctype(self):
        assert looks_like_html("<!DOCTYPE html><html></html>")

    def test_html_tag(self):
        assert looks_like_html("  \n<html lang='en'>")

    def test_plain_text(self):
        assert not looks_like_html("just some text <b>bold</b>")


class TestRenderMarkdown:
    def test_fenced_code_keeps_language(self):
        rendered = render_markdown("# Title\n\n```bash\nkubectl apply -f app.yaml\n```\n")

        assert "<h1>Title</h1>" in rendered
        assert 'class="language-bash"' in rendered
        assert "kubectl apply -f app.yaml" in rendered
