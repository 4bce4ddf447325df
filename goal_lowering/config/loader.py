import yaml
from .schema import LoweringConfig


def load_config(path: str) -> LoweringConfig:
    """YAML設定ファイルを読み込んでLoweringConfigを返す"""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    lowering_data = raw.get("lowering", {}) or {}
    goal_data = raw.get("goal", {}) or {}
    defaults = LoweringConfig()

    config = LoweringConfig(
        max_depth=int(lowering_data.get("max_depth", defaults.max_depth)),
        dummy_goal_name=goal_data.get("dummy_goal_name", defaults.dummy_goal_name),
        dummy_operator_name=goal_data.get("dummy_operator_name", defaults.dummy_operator_name),
        keep_numeric_constraints=bool(goal_data.get("keep_numeric_constraints",
                                                    defaults.keep_numeric_constraints)),
    )
    if config.max_depth <= 0:
        raise ValueError(f"max_depth must be positive, got {config.max_depth}")
    return config
