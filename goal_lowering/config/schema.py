from dataclasses import dataclass


@dataclass
class LoweringConfig:
    max_depth: int = 100                          # 式木の入れ子の上限。再帰に入る前に検査する
    dummy_goal_name: str = "dummy-goal"           # 選言ゴール用に追加する述語名
    dummy_operator_name: str = "dummy-operator"   # 各選言肢に対応する補助アクション名
    # 比較式を数値制約として残すか。False なら従来どおり捨てる
    keep_numeric_constraints: bool = False
