import pytest

from goal_lowering.config.loader import load_config
from goal_lowering.config.schema import LoweringConfig


def write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestLoadConfig:
    def test_full_file(self, tmp_path):
        cfg = load_config(write(tmp_path, """
lowering:
  max_depth: 64
goal:
  dummy_goal_name: goal-reached
  dummy_operator_name: reach-goal
  keep_numeric_constraints: true
"""))
        assert cfg == LoweringConfig(max_depth=64,
                                     dummy_goal_name="goal-reached",
                                     dummy_operator_name="reach-goal",
                                     keep_numeric_constraints=True)

    def test_defaults_fill_missing(self, tmp_path):
        cfg = load_config(write(tmp_path, "goal:\n  dummy_goal_name: g\n"))
        assert cfg.dummy_goal_name == "g"
        assert cfg.max_depth == LoweringConfig().max_depth
        assert not cfg.keep_numeric_constraints

    def test_empty_file(self, tmp_path):
        assert load_config(write(tmp_path, "")) == LoweringConfig()

    def test_non_positive_depth(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(write(tmp_path, "lowering:\n  max_depth: 0\n"))

    def test_shipped_default_config(self):
        import pathlib
        path = pathlib.Path(__file__).resolve().parents[2] / "configs" / "default_config.yaml"
        assert load_config(str(path)) == LoweringConfig()
