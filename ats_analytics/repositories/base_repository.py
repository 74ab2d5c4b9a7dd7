"""Base repository with tenant-scoped read operations."""

from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from supabase import Client

from ats_analytics.models.context import TenantContext

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository:
    """Base repository providing read operations shared by every table.

    All reads are filtered by the tenant's ``org_id``. Rows are validated
    into pydantic models before they leave the repository, so nothing
    downstream ever sees an untyped row.

    Attributes:
        db_client: Supabase client instance for database operations.
        table_name: Name of the database table this repository manages.
    """

    def __init__(self, db_client: Client, table_name: str):
        """Initialize the base repository.

        Args:
            db_client: Supabase client instance.
            table_name: Name of the database table (e.g., "jobs", "applications").
        """
        self.db_client = db_client
        self.table_name = table_name

    def scoped_query(self, ctx: TenantContext, columns: str = "*", table_name: Optional[str] = None):
        """Start a select on a table, filtered to the tenant's organization.

        Args:
            ctx: Tenant the query runs for.
            columns: Comma separated column list.
            table_name: Table to query; defaults to this repository's table.

        Returns:
            Supabase query builder ready for further filters.
        """
        return (
            self.db_client.table(table_name or self.table_name)
            .select(columns)
            .eq("org_id", ctx.org_id)
        )

    def fetch_rows(self, query, description: Optional[str] = None) -> List[Dict[str, Any]]:
        """Execute a query and return its rows.

        Args:
            query: Supabase query builder.
            description: What is being fetched, used in error messages.

        Returns:
            List of rows as dictionaries; empty when nothing matched.

        Raises:
            Exception: If the database query fails.
        """
        try:
            response = query.execute()
            return response.data or []
        except Exception as error:
            raise Exception(
                f"Failed to get {description or self.table_name}: {str(error)}"
            ) from error

    @staticmethod
    def to_models(rows: Sequence[Dict[str, Any]], model: Type[ModelT]) -> List[ModelT]:
        """Validate raw rows into models.

        Raises:
            pydantic.ValidationError: If a row does not match the model.
        """
        return [model.model_validate(row) for row in rows]

    def list_for_org(self, ctx: TenantContext, model: Type[ModelT], columns: str = "*") -> List[ModelT]:
        """Retrieve every row of this table for the tenant.

        Note:
            This loads all tenant rows into memory, which the analytics
            calculators need for their in-memory joins.
        """
        rows = self.fetch_rows(self.scoped_query(ctx, columns))
        return self.to_models(rows, model)
