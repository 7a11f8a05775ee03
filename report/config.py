from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# project root = epicurve/
ROOT = Path(__file__).resolve().parents[1]

# input table (override with EPICURVE_DATA_PATH in .env)
DATA_PATH = Path(os.getenv("EPICURVE_DATA_PATH", ROOT / "data" / "covid_by_state.csv"))
OUTPUT_DIR = Path(os.getenv("EPICURVE_OUTPUT_DIR", ROOT / "report" / "output"))

# canonical name -> column in the input table
COLUMNS = {
    "date": "date",
    "region": "state",
    "cases": "positive",
    "hospitalizations": "hospitalizedCumulative",
    "deaths": "death",
}

# curve
FIT_START = "2020-03-15"
DEGREE    = 5
HORIZON   = 14

# cleaning policy
ZERO_AS_MISSING  = True
CLAMP_INCREMENTS = False
CLAMP_PROJECTION = False
