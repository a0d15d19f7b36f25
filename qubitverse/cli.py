# qubitverse/cli.py
import argparse, logging, sys
import numpy as np
from .errors import SimulatorError
from .notation import parse
from .report import check_size, render

def main(argv=None):
    p = argparse.ArgumentParser(description="Run a circuit in qubitverse notation and print the report")
    p.add_argument("path", nargs="?", default="-", help="circuit file, '-' for stdin")
    p.add_argument("--backend", type=str, default="serial", choices=["serial","numba"])
    p.add_argument("--threads", type=int, default=None, help="numba thread count")
    p.add_argument("--max-qubits", type=int, default=None)
    p.add_argument("--seed", type=int, default=None, help="seed for measurement sampling")
    p.add_argument("--plot", type=str, default=None, help="save a bar chart of the final probabilities")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.path == "-":
            text = sys.stdin.read()
        else:
            with open(args.path, "r") as f:
                text = f.read()
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    rng = np.random.default_rng(args.seed)
    try:
        prog = parse(text)
        check_size(prog, args.max_qubits)
        report, st = render(prog, backend=args.backend, rng=rng, num_threads=args.threads)
    except SimulatorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    sys.stdout.write(report)

    if args.plot:
        from .plot_results import plot_probabilities
        plot_probabilities(st.probabilities(), args.plot)
    return 0

if __name__ == "__main__":
    sys.exit(main())
