import os
import warnings

# Ignore future warnings they're annoying.
warnings.simplefilter(action="ignore", category=FutureWarning)

# Batches are parallelised over candidate rows, so keep NumPy itself single threaded.
os.environ.setdefault("OMP_NUM_THREADS", "1")

__version__ = "0.1.0"
