# src/main.py
import json
import logging
import sys
import traceback
from typing import Any, Dict

from src.config import settings
from src.data.data_adaptor import MemoryDataAdaptor
from src.physics.phase_matrix import PhaseMatrix
from src.physics.phase_vector import PhaseVector

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format=settings.LOG_FORMAT,
    datefmt=settings.LOG_DATEFMT,
)
log = logging.getLogger("main")


def dump_json(obj: Any) -> str:
    return json.dumps(obj, indent=2, default=lambda o: repr(o))


def archive_round_trip(vec: PhaseVector) -> Dict[str, Any]:
    """
    Save vec under a fresh root node, rebuild the tree from its dict form and load it back.
    """
    root = MemoryDataAdaptor("beam")
    vec.save_child(root)
    tree = root.to_dict()

    restored = PhaseVector()
    restored.load_child(MemoryDataAdaptor.from_dict(tree))
    return {"tree": tree, "restored": str(restored), "equal": restored == vec}


def main():
    try:
        settings.validate_settings()

        z1 = PhaseVector()
        z2 = PhaseVector(1.0, 0.0, 2.0, 0.0, 3.0, 0.0)
        z3 = PhaseVector.parse("1.0 2.0 3.0 4.0 5.0 6.0")

        print("Vector #1 = ", end="")
        z1.println(sys.stdout)
        print("Vector #2 = ", end="")
        z2.println(sys.stdout)
        print("Vector #3 = ", end="")
        z3.println(sys.stdout)

        # affine shift of z2 by z3 as a single matrix product
        shifted = z2.times(PhaseMatrix.translation(z3))
        log.info("z2 translated by z3: %s", shifted)
        log.info("norms of z2: l1=%.6g l2^2=%.6g linf=%.6g", z2.norm1(), z2.norm2(), z2.norm_inf())

        summary = archive_round_trip(z2)
        log.info("Archive round trip:\n%s", dump_json(summary))
        return 0
    except Exception:
        log.error("Demo failed:\n%s", traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
