"""
Tests for ExtractionSession, the public entry point.

Covers:
- Script and template extraction end to end
- File kind selection and UnsupportedFileKind
- Syntax errors for both kinds
- Read-only results and idempotence
"""
import pytest

from emberdeps import (
    PARSE_ERRORS,
    ExtractionSession,
    ScriptSyntaxError,
    TemplateSyntaxError,
    UnsupportedFileKind,
    create_session,
)
from emberdeps.models import FileKind


POST_CONTROLLER = """
App.PostController = Ember.ObjectController.extend({
  needs: ['post', 'comments'],

  actions: {
    reload: function() {
      this.controllerFor('application').send('refresh');
    }
  }
});
"""

POSTS_ROUTE = """
App.PostsRoute = Ember.Route.extend({
  renderTemplate: function() {
    this.render('favoritePost', { into: 'posts', controller: 'blogPost' });
    this.render('foo', { into: 'bar', controller: 'cat' });
  }
});
"""

INDEX_TEMPLATE = """
<header>{{partial "header"}}</header>
{{#each post in controller}}
  {{render "post" post}}
{{else}}
  {{view "emptyList"}}
{{/each}}
"""


class TestScriptSessions:
    """Tests for script extraction."""

    def test_controller_for(self):
        """controllerFor names are mapped but not ordered."""
        session = create_session("this.controllerFor('post');", "script")
        assert session.controllers["post"] == "controller:post"
        assert "controller:post" not in session.ordered_names()

    def test_needs_string(self):
        session = create_session("App.X = Ember.Controller.extend({ needs: 'post' });", "script")
        assert session.controllers["post"] == "controller:post"
        assert session.ordered_names().count("controller:post") == 1

    def test_needs_array_declared_twice(self):
        """Repeated needs declarations append each name once."""
        source = """
        App.A = Ember.Controller.extend({ needs: ['post', 'comments'] });
        App.B = Ember.Controller.extend({ needs: ['comments', 'post'] });
        """
        session = create_session(source, "script")
        assert session.ordered_names() == ["controller:post", "controller:comments"]
        assert session.controllers == {
            "post": "controller:post",
            "comments": "controller:comments",
        }

    def test_render_template(self):
        """Outlet controllers precede outlet templates."""
        session = create_session(POSTS_ROUTE, "script")
        assert dict(session.templates) == {
            "favoritePost": "template:favoritePost",
            "posts": "template:posts",
            "foo": "template:foo",
            "bar": "template:bar",
        }
        assert dict(session.controllers) == {
            "blogPost": "controller:blogPost",
            "cat": "controller:cat",
        }
        assert session.ordered_names() == [
            "controller:blogPost",
            "controller:cat",
            "template:favoritePost",
            "template:posts",
            "template:foo",
            "template:bar",
        ]

    def test_mixed_controller(self):
        session = create_session(POST_CONTROLLER, "script")
        assert set(session.controllers) == {"post", "comments", "application"}
        assert session.ordered_names() == ["controller:post", "controller:comments"]

    def test_scripts_have_no_views(self):
        session = create_session(POST_CONTROLLER, "script")
        assert dict(session.views) == {}

    def test_default_kind_is_script(self):
        session = create_session("this.controllerFor('post');")
        assert session.file_kind is FileKind.SCRIPT
        assert "post" in session.controllers

    def test_module_source(self):
        """ES module syntax needs the module source type."""
        source = """
        import Ember from 'ember';
        export default Ember.Controller.extend({ needs: 'post' });
        """
        session = create_session(source, "script", source_type="module")
        assert session.ordered_names() == ["controller:post"]

    def test_module_syntax_in_script_mode(self):
        source = "import Ember from 'ember';"
        with pytest.raises(ScriptSyntaxError):
            create_session(source, "script")

    def test_unknown_source_type(self):
        with pytest.raises(ValueError):
            create_session("", "script", source_type="commonjs")

    def test_empty_script(self):
        session = create_session("", "script")
        assert session.ordered_names() == []


class TestTemplateSessions:
    """Tests for template extraction."""

    def test_partials(self):
        session = create_session('{{partial "foo"}}{{partial "bar"}}', "template")
        assert session.templates["foo"] == "template:foo"
        assert session.templates["bar"] == "template:bar"
        assert session.ordered_names() == ["template:foo", "template:bar"]

    def test_render(self):
        session = create_session('{{render "foo"}}', "template")
        assert session.templates["foo"] == "template:foo"
        assert session.controllers["foo"] == "controller:foo"
        assert session.ordered_names() == ["controller:foo", "template:foo"]

    def test_view(self):
        session = create_session('{{view "foo"}}', "template")
        assert session.views["foo"] == "view:foo"
        assert session.templates["foo"] == "template:foo"
        assert session.ordered_names() == ["view:foo", "template:foo"]

    def test_escaped_backslash_before_partial(self):
        """A doubled backslash still leaves a real partial helper."""
        session = create_session(r"\\{{partial 'foo'}}", "template")
        assert dict(session.templates) == {"foo": "template:foo"}
        assert session.ordered_names() == ["template:foo"]

    def test_escaped_partial_is_content(self):
        session = create_session(r"\{{partial 'foo'}}", "template")
        assert session.ordered_names() == []

    def test_block_view(self):
        """Block helpers are matched through their opening mustache."""
        session = create_session('{{#view "foo"}}x{{/view}}', "template")
        assert session.views["foo"] == "view:foo"
        assert session.templates["foo"] == "template:foo"

    def test_render_with_model_and_hash(self):
        session = create_session('{{render "foo" model key=value}}', "template")
        assert dict(session.templates) == {"foo": "template:foo"}
        assert dict(session.controllers) == {"foo": "controller:foo"}

    def test_full_template(self):
        session = create_session(INDEX_TEMPLATE, "template")
        assert session.ordered_names() == [
            "template:header",
            "controller:post",
            "template:post",
            "view:emptyList",
            "template:emptyList",
        ]

    def test_kind_as_enum(self):
        session = ExtractionSession('{{partial "foo"}}', file_kind=FileKind.TEMPLATE)
        assert session.file_kind is FileKind.TEMPLATE

    def test_template_text_as_script(self):
        """Declared kind decides the parser."""
        with pytest.raises(ScriptSyntaxError):
            create_session('{{partial "foo"}}', "script")


class TestErrors:
    """Tests for error conditions."""

    @pytest.mark.parametrize("kind", ["css", "Template", "", 0])
    def test_unsupported_kind(self, kind):
        with pytest.raises(UnsupportedFileKind):
            create_session("", kind)

    def test_unsupported_kind_before_parsing(self):
        """The kind is checked before the text is parsed."""
        with pytest.raises(UnsupportedFileKind):
            create_session("{{#if", "stylesheet")

    def test_unbalanced_template(self):
        with pytest.raises(TemplateSyntaxError):
            create_session('{{#if ready}}{{partial "foo"}}', "template")

    def test_unbalanced_script(self):
        with pytest.raises(ScriptSyntaxError):
            create_session("App.X = Ember.Controller.extend({ needs: 'post' ;", "script")

    @pytest.mark.parametrize("text,kind", [
        ("{{render 'foo'", "template"),
        ("this.controllerFor('post'", "script"),
    ])
    def test_parse_errors_tuple(self, text, kind):
        """PARSE_ERRORS catches failures of either kind."""
        with pytest.raises(PARSE_ERRORS):
            create_session(text, kind)

    def test_no_partial_results(self):
        """A failed extraction leaves nothing behind."""
        session = None
        with pytest.raises(TemplateSyntaxError):
            session = create_session('{{render "foo"}}{{/if}}', "template")
        assert session is None


class TestSessionResults:
    """Tests for result access."""

    def test_mappings_are_read_only(self):
        session = create_session('{{render "foo"}}', "template")
        with pytest.raises(TypeError):
            session.controllers["bar"] = "controller:bar"
        with pytest.raises(TypeError):
            session.templates["bar"] = "template:bar"
        with pytest.raises(TypeError):
            session.views["bar"] = "view:bar"

    def test_ordered_names_is_a_copy(self):
        session = create_session('{{render "foo"}}', "template")
        names = session.ordered_names()
        names.append("template:extra")
        assert session.ordered_names() == ["controller:foo", "template:foo"]

    def test_get_full_names(self):
        session = create_session('{{view "foo"}}', "template")
        assert session.get_full_names() == session.ordered_names()

    def test_idempotent(self):
        """Identical text gives identical results."""
        first = create_session(POSTS_ROUTE, "script")
        second = create_session(POSTS_ROUTE, "script")
        assert dict(first.controllers) == dict(second.controllers)
        assert dict(first.templates) == dict(second.templates)
        assert first.ordered_names() == second.ordered_names()

    def test_sessions_do_not_share_state(self):
        first = create_session('{{partial "foo"}}', "template")
        create_session('{{partial "bar"}}', "template")
        assert dict(first.templates) == {"foo": "template:foo"}

    def test_repr(self):
        session = create_session('{{partial "foo"}}', "template")
        assert repr(session) == "ExtractionSession(template, 1 names)"
