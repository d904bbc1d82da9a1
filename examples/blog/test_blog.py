"""Tests for the blog example."""


class TestBlogApp:
    """Verify pages, layout, loaders and slots work end-to-end."""

    def test_routes(self, example_app) -> None:
        assert [(r.pattern, r.method) for r in example_app.app.routes] == [
            ("/", "GET"),
            ("/posts/:slug", "GET"),
        ]

    def test_partials_are_components_not_pages(self, example_app) -> None:
        assert "Tags" in example_app.app.components
        assert "Tags" not in example_app.app.pages

    def test_home_lists_posts(self, example_app) -> None:
        response = example_app.get("/")
        assert response.status == 200
        assert response.body.startswith("<html><head><title>My Blog</title></head>")
        assert '<a href="/posts/slots">Slots &amp; Layouts</a>' in response.body

    def test_post_page(self, example_app) -> None:
        body = example_app.get("/posts/Hello").body
        assert "<h1>Hello, noxt</h1>" in body
        assert '<ul class="tags"><li>intro</li><li>python</li></ul>' in body
        assert '<meta name="description" content="Components all the way down">' in body

    def test_missing_post_sets_status(self, example_app) -> None:
        response = example_app.get("/posts/nope")
        assert response.status == 404
        assert "No such post" in response.body

    def test_unknown_path(self, example_app) -> None:
        assert example_app.get("/drafts").status == 404

    def test_partial_renders_alone(self, example_app) -> None:
        html = example_app.render("Tags", {"tags": ["a&b"]})
        assert html == '<ul class="tags"><li>a&amp;b</li></ul>'

    def test_path_for(self, example_app) -> None:
        assert example_app.app.path_for("Post", {"slug": "Hello"}) == "/posts/hello"
