"""
Ledger Configuration Value

The user's categories, budgets and savings goals. Loading and saving the
YAML file is the caller's job; this module only knows the parsed shape.

DESIGN DECISION: PurseConfig is immutable. Every mutation below returns a
ConfigChange holding a NEW config plus whether anything changed. The
caller decides whether to persist it. Nothing here touches the disk.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CategoryBudget(BaseModel):
    """
    Spending cap for one category per budget cycle.

    The "monthly" in the name is historical: the cap applies to one
    budget cycle, whatever day it starts on.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str
    monthly_budget: Decimal = Field(alias="monthlyBudget")


class SavingsGoal(BaseModel):
    """A target amount measured against total savings."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    target: Decimal
    priority: GoalPriority = GoalPriority.MEDIUM
    deadline: Optional[date] = None


class DisplayConfig(BaseModel):
    """Passed through untouched for the presentation layer."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    currency_symbol: Optional[str] = Field(default=None, alias="currencySymbol")
    date_format: Optional[str] = Field(default=None, alias="dateFormat")


class PurseConfig(BaseModel):
    """
    Parsed ledger configuration.

    Category names are kept in the order the user added them. Duplicates
    are not rejected here; add_category refuses to create them.
    """
    model_config = ConfigDict(frozen=True)

    database_path: Optional[str] = None
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    categories: tuple[str, ...] = ()
    cycle_start_day: int = 1
    category_budgets: tuple[CategoryBudget, ...] = ()
    savings_goals: tuple[SavingsGoal, ...] = ()

    @classmethod
    def from_document(cls, document: Optional[dict[str, Any]]) -> "PurseConfig":
        """
        Build from the YAML document layout:

            database: {path}
            display: {currencySymbol, dateFormat}
            categories: [...]
            budget: {cycleStartDay, categoryBudgets: [{category, monthlyBudget}]}
            savings: {goals: [{name, target, priority, deadline}]}
        """
        document = document or {}
        database = document.get("database") or {}
        budget = document.get("budget") or {}
        savings = document.get("savings") or {}
        cycle_start_day = budget.get("cycleStartDay")

        return cls.model_validate({
            "database_path": database.get("path"),
            "display": document.get("display") or {},
            "categories": document.get("categories") or (),
            "cycle_start_day": 1 if cycle_start_day is None else cycle_start_day,
            "category_budgets": budget.get("categoryBudgets") or (),
            "savings_goals": savings.get("goals") or (),
        })

    def to_document(self) -> dict[str, Any]:
        """Inverse of from_document, for the caller to dump as YAML."""
        document: dict[str, Any] = {}
        if self.database_path is not None:
            document["database"] = {"path": self.database_path}

        display = self.display.model_dump(mode="json", by_alias=True, exclude_none=True)
        if display:
            document["display"] = display

        document["categories"] = list(self.categories)

        budget: dict[str, Any] = {"cycleStartDay": self.cycle_start_day}
        if self.category_budgets:
            budget["categoryBudgets"] = [
                {"category": b.category, "monthlyBudget": _plain_number(b.monthly_budget)}
                for b in self.category_budgets
            ]
        document["budget"] = budget

        if self.savings_goals:
            goals = []
            for goal in self.savings_goals:
                entry: dict[str, Any] = {
                    "name": goal.name,
                    "target": _plain_number(goal.target),
                    "priority": goal.priority.value,
                }
                if goal.deadline is not None:
                    entry["deadline"] = goal.deadline.isoformat()
                goals.append(entry)
            document["savings"] = {"goals": goals}

        return document


class ConfigChange(BaseModel):
    """Result of a config mutation."""
    model_config = ConfigDict(frozen=True)

    config: PurseConfig
    applied: bool


def _plain_number(value: Decimal) -> Union[int, Decimal]:
    """
    Integral values as ints. Other values stay Decimal so no digits are
    lost; the YAML layer decides how to write them.
    """
    if value == value.to_integral_value():
        return int(value)
    return value


def _unchanged(config: PurseConfig) -> ConfigChange:
    return ConfigChange(config=config, applied=False)


def _changed(config: PurseConfig, **updates: Any) -> ConfigChange:
    return ConfigChange(config=config.model_copy(update=updates), applied=True)


# =============================================================================
# CATEGORIES
# =============================================================================

def add_category(config: PurseConfig, name: str) -> ConfigChange:
    if name in config.categories:
        return _unchanged(config)
    return _changed(config, categories=config.categories + (name,))


def rename_category(config: PurseConfig, old_name: str, new_name: str) -> ConfigChange:
    """
    Rename in place. Refused when old_name is missing or new_name exists.

    A budget kept under the old name follows the rename.
    """
    if old_name not in config.categories or new_name in config.categories:
        return _unchanged(config)

    categories = tuple(new_name if c == old_name else c for c in config.categories)
    budgets = tuple(
        b.model_copy(update={"category": new_name}) if b.category == old_name else b
        for b in config.category_budgets
    )
    return _changed(config, categories=categories, category_budgets=budgets)


def delete_category(config: PurseConfig, name: str) -> ConfigChange:
    if name not in config.categories:
        return _unchanged(config)
    return _changed(config, categories=tuple(c for c in config.categories if c != name))


# =============================================================================
# BUDGETS
# =============================================================================

def get_category_budget(config: PurseConfig, category: str) -> Decimal:
    """Configured budget for a category, 0 when none is set."""
    for budget in config.category_budgets:
        if budget.category == category:
            return budget.monthly_budget
    return Decimal(0)


def set_category_budget(
    config: PurseConfig,
    category: str,
    monthly_budget: Union[Decimal, int, float, str],
) -> ConfigChange:
    """Replace an existing budget in place, or append a new one."""
    new_budget = CategoryBudget(category=category, monthly_budget=monthly_budget)
    budgets = list(config.category_budgets)
    for index, existing in enumerate(budgets):
        if existing.category == category:
            budgets[index] = new_budget
            break
    else:
        budgets.append(new_budget)
    return _changed(config, category_budgets=tuple(budgets))


def remove_category_budget(config: PurseConfig, category: str) -> ConfigChange:
    remaining = tuple(b for b in config.category_budgets if b.category != category)
    if len(remaining) == len(config.category_budgets):
        return _unchanged(config)
    return _changed(config, category_budgets=remaining)


def set_cycle_start_day(config: PurseConfig, day: int) -> ConfigChange:
    """Range checks belong to the input layer (see InputValidator)."""
    if config.cycle_start_day == day:
        return _unchanged(config)
    return _changed(config, cycle_start_day=day)


# =============================================================================
# SAVINGS GOALS
# =============================================================================

def get_savings_goal(config: PurseConfig, name: str) -> Optional[SavingsGoal]:
    for goal in config.savings_goals:
        if goal.name == name:
            return goal
    return None


def set_savings_goal(
    config: PurseConfig,
    name: str,
    target: Union[Decimal, int, float, str],
    priority: Union[GoalPriority, str] = GoalPriority.MEDIUM,
    deadline: Optional[date] = None,
) -> ConfigChange:
    """
    Create or replace a goal by name.

    Replacing keeps the goal's position in the list.
    """
    new_goal = SavingsGoal(
        name=name,
        target=target,
        priority=GoalPriority(priority),
        deadline=deadline,
    )
    goals = list(config.savings_goals)
    for index, existing in enumerate(goals):
        if existing.name == name:
            goals[index] = new_goal
            break
    else:
        goals.append(new_goal)
    return _changed(config, savings_goals=tuple(goals))


def remove_savings_goal(config: PurseConfig, name: str) -> ConfigChange:
    remaining = tuple(g for g in config.savings_goals if g.name != name)
    if len(remaining) == len(config.savings_goals):
        return _unchanged(config)
    return _changed(config, savings_goals=remaining)
