DEBUG_ONLY = False

TUBE_SIZE = 4
MIN_TUBES = 4
NUM_BUFFER_TUBES = 2 # Tubes expected to start empty in a well formed puzzle

EMPTY_TOKENS = set(["", "empty", "-"])

SOLVE_METHOD = "BUCKET"
VALID_SOLVE_METHODS = set(["BUCKET", "BFS", "DFS"]) # Mirrors SolveMethod, for validating user input

REPORT_ITERATION_FREQ = 10000
MAX_SEARCH_ITERATIONS = None # None searches until the reachable states run out
