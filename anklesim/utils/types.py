from typing import Annotated

import numpy as np
import numpy.typing as npt
from beartype import beartype, BeartypeConf
from beartype.vale import Is


# See https://beartype.readthedocs.io/en/latest/api_decor/#beartype.BeartypeConf.is_pep484_tower
beartowertype = beartype(conf=BeartypeConf(is_pep484_tower=True))

# Type aliases for numpy arrays with specific dimensions

# Sample vector: (samples,)
SAMPLES__VECTOR = Annotated[
    npt.NDArray[np.floating],
    Is[lambda x: x.ndim == 1],
]

# Body state vector: [theta, omega, lce_soleus, lce_tibialis]
BODY_STATE__VECTOR = Annotated[
    npt.NDArray[np.floating],
    Is[lambda x: x.shape == (4,)],
]

# Scalar or array input accepted by the force curves and geometry helpers
FLOAT_OR_ARRAY = float | npt.NDArray[np.floating]
