from gosurgeon.schemas import Declaration


def match_name(candidate: str, query: str) -> bool:
    """
    Lenient name matching used by every symbol search.

    Accepts an exact match, a case-insensitive match, or the query appearing
    anywhere in the candidate ignoring case. So "user" matches "User",
    "UserService" and "CreateUser".
    """
    if candidate == query:
        return True
    candidate_lower = candidate.lower()
    query_lower = query.lower()
    return candidate_lower == query_lower or query_lower in candidate_lower


def declaration_matches(record: Declaration, query: str) -> bool:
    """Match a record by qualified name, bare identifier, or "*Recv.Method" form."""
    if match_name(record.name, query) or match_name(record.bare_name, query):
        return True
    if record.receiver:
        return match_name(f"{record.receiver}.{record.bare_name}", query)
    return False


def names_declaration(record: Declaration, name: str) -> bool:
    """Exact counterpart of declaration_matches: the record answers to name as written."""
    if name in (record.name, record.bare_name):
        return True
    return bool(record.receiver) and name == f"{record.receiver}.{record.bare_name}"
