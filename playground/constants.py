# playground/constants.py
# Closed enumerations and default session values for the share payloads

from enum import Enum


class SqlDialect(str, Enum):
    """SQL dialects the playground can compile a query for."""
    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    MSSQL = "mssql"


class StoreProviderId(str, Enum):
    """Backends a share can be stored in. The value is what appears in share links."""
    URL = "url"      # state compressed into the link itself
    DB = "db"        # PostgreSQL row, link carries a short id
    REDIS = "redis"  # Redis key with TTL, link carries a short id


SQL_DIALECT_VALUES: frozenset[str] = frozenset(d.value for d in SqlDialect)
STORE_PROVIDER_ID_VALUES: frozenset[str] = frozenset(p.value for p in StoreProviderId)

DEFAULT_SQL_DIALECT: SqlDialect = SqlDialect.MYSQL
DEFAULT_KYSELY_VERSION: str = "0.27.4"

DEFAULT_TYPESCRIPT_SCHEMA: str = """interface DB {
  user: UserTable
}

interface UserTable {
  id: Generated<string>
  first_name: string | null
  last_name: string | null
  created_at: Generated<Date>
}
"""

DEFAULT_TYPESCRIPT_QUERY: str = """const rows = await db
  .selectFrom("user")
  .select(["id", "first_name"])
  .where("id", "=", "1")
  .execute()
"""

# Legacy single-editor source (schema and query in one buffer)
DEFAULT_LEGACY_TS: str = DEFAULT_TYPESCRIPT_SCHEMA + "\n" + DEFAULT_TYPESCRIPT_QUERY

# Wire keys of the legacy SharedState payload
SHARED_STATE_KEYS: tuple[str, ...] = ("kyselyVersion", "dialect", "ts")

# Wire keys of the StoreItem payload
STORE_ITEM_KEYS: tuple[str, ...] = (
    "sqlDialect",
    "kyselyVersion",
    "typescriptSchema",
    "typescriptQuery",
    "showTypescriptSchema",
)

# Share link parameters (kept in the URL fragment)
SHARE_PARAM_PROVIDER: str = "p"
SHARE_PARAM_VALUE: str = "v"
