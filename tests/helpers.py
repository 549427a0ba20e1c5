import json
from pathlib import Path

import numpy as np

from tableau_optimizer import Model
from tableau_optimizer.lp.tableau import Tableau


def load_example(name: str) -> Model:
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    return Model.model_validate(data)


def make_tableau(rows) -> Tableau:
    grid = np.array(rows, dtype=float)
    height, width = grid.shape
    return Tableau(
        matrix=grid.ravel().copy(),
        width=width,
        height=height,
        position_of_variable=np.arange(width + height, dtype=np.int32),
        variable_at_position=np.arange(width + height, dtype=np.int32),
    )
