import argparse


def build_common_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(add_help=False)
    ap.add_argument("--config", default=None, help="Path to identicon YAML config")
    ap.add_argument("--screen-width", type=int, default=None, help="Screen width hint in pixels (picks the image size)")
    ap.add_argument("--out-dir", default=None, help="Directory for written images")
    ap.add_argument("--verbose", action="store_true", help="Log per-generator detail")
    return ap
