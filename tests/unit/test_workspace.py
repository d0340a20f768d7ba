"""
Unit Tests for Workspace
"""

from exporter.workspace import Workspace


class TestWorkspace:
    def test_created_under_root(self, tmp_path):
        workspace = Workspace("42", tmp_path / "temp")

        assert workspace.exists
        assert workspace.path.parent == tmp_path / "temp"
        assert workspace.path.name.startswith("article-42-")

    def test_article_round_trip(self, tmp_path):
        workspace = Workspace("42", tmp_path)
        path = workspace.write_article({"title": "Café"})

        assert path.name == "article.json"
        assert workspace.read_article() == {"title": "Café"}

    def test_context_manager_cleans_up(self, tmp_path):
        with Workspace("42", tmp_path) as workspace:
            workspace.write_article({})
            path = workspace.path

        assert not path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_clean_up_twice(self, tmp_path):
        workspace = Workspace("42", tmp_path)
        workspace.clean_up()
        workspace.clean_up()
        assert not workspace.exists
