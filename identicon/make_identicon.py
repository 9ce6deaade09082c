#!/usr/bin/env python3
import argparse
import json
import os
import sys
from typing import List, Optional

from identicon.cli.args import build_common_parser
from identicon.core import configure_logging, get_logger, load_config, load_env
from identicon.generator import generate
from identicon.render.qa_gates import check_canvas, image_signature, qa_result_to_dict
from identicon.render.sdk import InvalidProfile, Profile, split_name
from identicon.utils.slug import safe_slug

log = get_logger("identicon.make_identicon")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Write deterministic contact pictures for one or more names",
        parents=[build_common_parser()],
    )
    ap.add_argument("names", nargs="*", help="Contact names")
    ap.add_argument("--names-file", default=None, help="File with one contact name per line")
    ap.add_argument("--variant", type=int, default=0, help="Ask for another picture for the same name")
    ap.add_argument("--hash", dest="digest", default=None, help="Use this hash instead of the name's MD5 (single name only)")
    ap.add_argument("--qa-report", default=None, help="Write per-image QA results to this JSON file")
    return ap


def _read_names(args) -> List[str]:
    names = list(args.names)
    if args.names_file:
        with open(args.names_file, "r", encoding="utf-8") as fh:
            names.extend(line.strip() for line in fh if line.strip())
    return names


def _profile_for(name: str, digest: Optional[str], variant: int) -> Profile:
    if digest:
        normalized = " ".join(name.split())
        return Profile(full_name=normalized, name_parts=split_name(normalized), digest=digest)
    return Profile.from_name(name, variant=variant)


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    names = _read_names(args)
    if not names:
        ap.error("at least one name (or --names-file) is required")
    if args.digest and len(names) != 1:
        ap.error("--hash can only be used with a single name")

    load_env()
    cfg = load_config(args.config)
    if args.verbose:
        cfg.logging.level = "DEBUG"
    configure_logging(cfg)

    out_dir = args.out_dir or cfg.output.dir
    os.makedirs(out_dir, exist_ok=True)
    screen_width = args.screen_width or cfg.render.default_screen_width

    failed = 0
    report = {}
    for name in names:
        try:
            profile = _profile_for(name, args.digest, args.variant)
            image = generate(profile, screen_width, cfg)
        except InvalidProfile as e:
            log.error(f"Skipping {name!r}: {e}")
            failed += 1
            continue

        suffix = f"-{args.variant}" if args.variant else ""
        path = os.path.join(out_dir, f"{safe_slug(profile.full_name)}{suffix}.{cfg.output.format}")
        image.save(path)
        qa = check_canvas(image)
        report[path] = {"signature": image_signature(image), **qa_result_to_dict(qa)}
        log.info(
            f"Wrote {path} ({image.size[0]}px, signature {image_signature(image)}, "
            f"qa={'ok' if qa.ok else 'fail'})"
        )

    if args.qa_report:
        with open(args.qa_report, "w", encoding="utf-8") as fh:
            json.dump(report, fh, indent=2)
        log.info(f"QA report written to {args.qa_report}")

    if failed:
        log.error(f"{failed} of {len(names)} names failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
