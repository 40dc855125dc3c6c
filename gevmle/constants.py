import numpy as np

# Penalty hyperparameters
ALPHA = 100.0       # Weight of the barrier on 0 < sigma
BETA = 100.0        # Weight of the barrier on 1 + xi*(z - mu)/sigma > 0
LAMBDA = 50.0       # Barrier is active below 1/LAMBDA

# Below this |xi| the Gumbel likelihood is used
XI_TOL = 1e-8

# Returned by the objective for infeasible parameters
SENTINEL = 1e10
GRAD_CAP = 1e10

# Largest exponent passed to np.exp (log of the largest double is ~709.78)
MAX_EXP = 700.0

# Solver
GTOL = 1e-5
MAXITER = 500
XI0 = 0.1

# Sample checks
MIN_SAMPLE_SIZE = 3
VAR_TOL = 1e-10

EULER_GAMMA = np.euler_gamma
