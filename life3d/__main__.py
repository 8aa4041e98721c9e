from __future__ import annotations

HELP = """life3d: 3D cellular automaton with hysteresis health

Common commands:
  python -m life3d.run --config configs/default.yaml --generations 100 --out_dir results/default
  python -m life3d.run --dims 20 --neighbourhood moore --neighbours 4 5 6 --seed 7
  python -m life3d.bench --sizes 10 20 40 --tasks 1 8
  python -m life3d.validate --dims 12 --tasks 1 2 3 8 64

"""


def main() -> None:
    print(HELP)


if __name__ == "__main__":
    main()
