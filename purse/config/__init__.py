"""Configuration package."""

from purse.config.settings import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from purse.config.ledger_config import (
    CategoryBudget,
    ConfigChange,
    DisplayConfig,
    GoalPriority,
    PurseConfig,
    SavingsGoal,
    add_category,
    delete_category,
    get_category_budget,
    get_savings_goal,
    remove_category_budget,
    remove_savings_goal,
    rename_category,
    set_category_budget,
    set_cycle_start_day,
    set_savings_goal,
)

__all__ = [
    # Runtime settings
    "AppSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
    # Ledger configuration
    "CategoryBudget",
    "ConfigChange",
    "DisplayConfig",
    "GoalPriority",
    "PurseConfig",
    "SavingsGoal",
    "add_category",
    "delete_category",
    "get_category_budget",
    "get_savings_goal",
    "remove_category_budget",
    "remove_savings_goal",
    "rename_category",
    "set_category_budget",
    "set_cycle_start_day",
    "set_savings_goal",
]
