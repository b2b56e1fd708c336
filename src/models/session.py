"""
Session-Scoped View Models

DESIGN DECISION: Anything that only matters while the page is open lives
here, never inside BudgetData. None of these models is ever written to
storage, so a reload always starts from their defaults.
"""

from typing import Union

from pydantic import BaseModel, Field

from src.models.expense import ChartType, ExpenseEntry


class AnalyticsView(BaseModel):
    """Analytics panel visibility and chart selection."""

    visible: bool = False
    chart_type: ChartType = ChartType.PIE

    def toggle(self) -> bool:
        """Flip between hidden and shown. Returns the new visibility."""
        self.visible = not self.visible
        return self.visible

    def select_chart(self, chart_type: Union[ChartType, str]) -> ChartType:
        self.chart_type = ChartType(chart_type)
        return self.chart_type


class EntryDraft(BaseModel):
    """
    The rows staged in the expense entry form.

    There is always at least one row, so the form never renders empty.
    """

    rows: list[ExpenseEntry] = Field(
        default_factory=lambda: [ExpenseEntry()]
    )

    def add_row(self) -> ExpenseEntry:
        row = ExpenseEntry()
        self.rows.append(row)
        return row

    def remove_row(self, row_id: str) -> bool:
        """Remove a staged row. The last remaining row is kept."""
        if len(self.rows) <= 1:
            return False
        remaining = [row for row in self.rows if row.row_id != row_id]
        if len(remaining) == len(self.rows):
            return False
        self.rows = remaining
        return True

    def update_row(self, row_id: str, **fields) -> ExpenseEntry:
        """
        Replace fields on one staged row.

        Raises:
            KeyError: If no row has that id
        """
        for index, row in enumerate(self.rows):
            if row.row_id == row_id:
                updated = ExpenseEntry.model_validate(
                    {**row.model_dump(), **fields}
                )
                self.rows[index] = updated
                return updated
        raise KeyError(row_id)

    def reset(self) -> None:
        """Back to a single empty row."""
        self.rows = [ExpenseEntry()]
