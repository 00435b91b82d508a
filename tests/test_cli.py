"""
Tests for the emberdeps command line.
"""
import pytest

from emberdeps.cli import main
from emberdeps.serializer import load_results


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "index.hbs"
    path.write_text('{{render "post"}}')
    return path


class TestSingleFile:
    """Tests for analyzing one file."""

    def test_template(self, template_file, capsys):
        assert main([str(template_file)]) == 0
        out = capsys.readouterr().out
        assert "controller:post" in out
        assert "template:post" in out

    def test_json(self, template_file, capsys):
        assert main([str(template_file), "--json"]) == 0
        out = capsys.readouterr().out
        assert '"controller:post"' in out
        assert '"version"' in out

    def test_no_dependencies(self, tmp_path, capsys):
        path = tmp_path / "plain.hbs"
        path.write_text("<p>static</p>")
        assert main([str(path)]) == 0
        assert "No dependencies found." in capsys.readouterr().out

    def test_missing_path(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.hbs")]) == 1
        assert "Path does not exist" in capsys.readouterr().out

    def test_syntax_error(self, tmp_path, capsys):
        path = tmp_path / "broken.hbs"
        path.write_text("{{#if ready}}")
        assert main([str(path)]) == 1
        assert "Syntax error" in capsys.readouterr().out

    def test_unknown_kind(self, tmp_path, capsys):
        path = tmp_path / "snippet.txt"
        path.write_text('{{view "foo"}}')
        assert main([str(path)]) == 1
        assert "--kind" in capsys.readouterr().out

    def test_kind_option(self, tmp_path, capsys):
        path = tmp_path / "snippet.txt"
        path.write_text('{{view "foo"}}')
        assert main([str(path), "--kind", "template"]) == 0
        assert "view:foo" in capsys.readouterr().out

    def test_invalid_kind_option(self, template_file):
        with pytest.raises(SystemExit):
            main([str(template_file), "--kind", "css"])

    def test_deeply_nested_template(self, tmp_path, capsys):
        path = tmp_path / "deep.hbs"
        path.write_text("{{#if a}}" * 600 + "{{/if}}" * 600)
        assert main([str(path)]) == 1
        assert "Syntax error" in capsys.readouterr().out

    def test_module_option(self, tmp_path, capsys):
        path = tmp_path / "post.js"
        path.write_text("export default { needs: 'comments' };")
        assert main([str(path)]) == 1
        assert main([str(path), "--module"]) == 0
        assert "controller:comments" in capsys.readouterr().out


class TestDirectory:
    """Tests for scanning a directory."""

    @pytest.fixture
    def app_dir(self, tmp_path):
        templates = tmp_path / "app" / "templates"
        templates.mkdir(parents=True)
        (templates / "index.hbs").write_text('{{partial "header"}}')
        (templates / "broken.hbs").write_text("{{foo")
        controllers = tmp_path / "app" / "controllers"
        controllers.mkdir(parents=True)
        (controllers / "post.js").write_text("x = { needs: 'comments' };")
        return tmp_path

    def test_summary(self, app_dir, capsys):
        assert main([str(app_dir)]) == 0
        out = capsys.readouterr().out
        assert "Dependency Scan" in out
        assert "Could not analyze" in out

    def test_output_file(self, app_dir, tmp_path, capsys):
        output = tmp_path / "deps.json"
        assert main([str(app_dir), "--output", str(output)]) == 0
        assert "Results saved to" in capsys.readouterr().out

        results, failures = load_results(output)
        assert len(results) == 2
        assert len(failures) == 1
        names = {name for r in results for name in r.names}
        assert names == {"template:header", "controller:comments"}

    def test_kind_rejected_for_directory(self, app_dir, capsys):
        """--kind only applies to a single file."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(app_dir), "--kind", "template"])
        assert exc_info.value.code == 2
        assert "--kind applies to a single file" in capsys.readouterr().err
