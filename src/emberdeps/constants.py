"""
Centralized constants for the emberdeps package.

This module contains:
- Namespace tags used to build fully-qualified dependency names
- Framework idiom names recognized by the matchers
- File extension mappings for file-kind detection
- Directory ignore patterns for scanning
"""

# =============================================================================
# Dependency Names
# =============================================================================

# Joins a namespace tag and a short name: "controller" + "post" -> "controller:post"
NAMESPACE_SEPARATOR = ":"

CONTROLLER_NAMESPACE = "controller"
TEMPLATE_NAMESPACE = "template"
VIEW_NAMESPACE = "view"

# =============================================================================
# Script Idioms
# =============================================================================

# this.controllerFor('post')
CONTROLLER_FOR_METHOD = "controllerFor"

# needs: 'post' / needs: ['post', 'comments']
NEEDS_PROPERTY = "needs"

# renderTemplate: function() { this.render(...) }
RENDER_TEMPLATE_PROPERTY = "renderTemplate"
RENDER_METHOD = "render"

# Keys read from the options object passed to this.render()
OUTLET_INTO_KEY = "into"
OUTLET_CONTROLLER_KEY = "controller"

# Node types that carry a function body
JS_FUNCTION_TYPES: frozenset[str] = frozenset({
    "FunctionExpression",
    "ArrowFunctionExpression",
    "FunctionDeclaration",
})

# Accepted values for the esprima entry point
SCRIPT_SOURCE_TYPES: frozenset[str] = frozenset({"script", "module"})
DEFAULT_SOURCE_TYPE = "script"

# =============================================================================
# Template Idioms
# =============================================================================

PARTIAL_HELPER = "partial"
RENDER_HELPER = "render"
VIEW_HELPER = "view"

# Keywords that become literal params instead of paths
HANDLEBARS_LITERAL_KEYWORDS: dict[str, str] = {
    "true": "BOOLEAN",
    "false": "BOOLEAN",
    "null": "NULL",
    "undefined": "UNDEFINED",
}

# Deepest block or subexpression nesting the template parser accepts
MAX_TEMPLATE_NESTING = 100

# =============================================================================
# File Kinds
# =============================================================================

DEFAULT_FILE_KIND = "script"

# Map file extensions to file kinds
FILE_KIND_EXTENSION_MAP: dict[str, str] = {
    '.js': 'script',
    '.mjs': 'script',
    '.cjs': 'script',
    '.hbs': 'template',
    '.handlebars': 'template',
}

# =============================================================================
# File Scanner Constants
# =============================================================================

# Directories to ignore when scanning
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({
    '.git', '.hg', '.svn',              # Version control
    'node_modules', 'bower_components', # Dependencies
    'vendor',
    'tmp', 'dist',                      # Ember CLI build outputs
    '.idea', '.vscode',                 # IDE configs
    '__pycache__', '.pytest_cache',
})

# =============================================================================
# Serialization
# =============================================================================

# Version string for saved result files (for format compatibility)
RESULT_FILE_VERSION = "1.0"
