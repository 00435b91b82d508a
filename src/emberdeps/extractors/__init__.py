"""
Node matchers for Ember dependency idioms.

Script matchers (ESTree nodes):
- match_controller_for: this.controllerFor('name')
- match_needs: needs: 'name' / needs: ['a', 'b']
- match_render_outlet: renderTemplate hooks calling this.render(...)

Template matchers (Handlebars nodes):
- match_partial: {{partial "name"}}
- match_render: {{render "name"}}
- match_view: {{view "name"}}
"""

from emberdeps.extractors.script_matchers import (
    match_controller_for,
    match_needs,
    match_render_outlet,
)
from emberdeps.extractors.template_matchers import (
    match_partial,
    match_render,
    match_view,
)

__all__ = [
    "match_controller_for",
    "match_needs",
    "match_render_outlet",
    "match_partial",
    "match_render",
    "match_view",
]
