# Source files the parser understands
GO_EXTENSION = ".go"
TEST_FILE_SUFFIX = "_test.go"

# Directory names never descended into below a scan root.
# Hidden directories (leading ".") are pruned as well.
EXCLUDED_DIRS = frozenset({
    "vendor",    # module dependency copies
    "testdata",  # go tool fixture directories
})

# tree-sitter-go node types for top-level declarations
FUNCTION_NODES = ("function_declaration", "method_declaration")
TYPE_DECLARATION_NODE = "type_declaration"
TYPE_SPEC_NODES = ("type_spec", "type_alias")
VALUE_DECLARATION_NODES = {
    "var_declaration": "variable",
    "const_declaration": "constant",
}
VALUE_SPEC_NODES = ("var_spec", "const_spec")
# Wrappers tree-sitter-go puts between a declaration and its specs in grouped form
SPEC_LIST_NODES = ("var_spec_list", "type_spec_list", "const_spec_list")
PARAMETER_NODES = ("parameter_declaration", "variadic_parameter_declaration")


def is_excluded_dir(name: str) -> bool:
    """True for directory names the walker prunes (hidden or excluded)."""
    return name.startswith(".") or name in EXCLUDED_DIRS
