import argparse
import os
import sys

from compiler import compile_sync, load_config, set_verbose
from sfc.log import log, warn


def read_source(filename):
    if filename is None or filename == "-":
        # Read from stdin
        return sys.stdin.read(), None
    if not os.path.exists(filename):
        print(f"Error: File '{filename}' not found.", file=sys.stderr)
        sys.exit(1)
    with open(filename, "r", encoding="utf-8") as f:
        return f.read(), os.path.abspath(filename)


def build(args):
    set_verbose(args.verbose)
    if args.config:
        if not load_config(args.config):
            print(f"Error: Config file '{args.config}' not found.", file=sys.stderr)
            sys.exit(1)
    else:
        load_config()

    content, file_path = read_source(args.filename)
    try:
        result = compile_sync(content, file_path, scope_id=getattr(args, "scope_id", None),
                              strict=getattr(args, "strict", False))
    except Exception as e:
        print(f"Error: Compilation Failed:{e}", file=sys.stderr)
        sys.exit(1)
    return result


def cmd_build(args):
    result = build(args)
    if args.output:
        out_dir = os.path.dirname(os.path.abspath(args.output))
        os.makedirs(out_dir, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result.code)
        log(f"Wrote {args.output}")
    else:
        sys.stdout.write(result.code)

    if result.warnings:
        warn(f"{len(result.warnings)} warning(s) while compiling {args.filename}")


def cmd_deps(args):
    result = build(args)
    for path in result.dependencies:
        print(path)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compile .vue single-file components")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    parser.add_argument("--config", help="Path to a vue.config.py (default: ./vue.config.py if present)")
    subparsers = parser.add_subparsers(dest="command")

    build_parser = subparsers.add_parser("build", help="Compile a component into a CommonJS module")
    build_parser.add_argument("filename", nargs="?", default="-", help="File to compile (default: read from stdin)")
    build_parser.add_argument("-o", "--output", help="Write the module to this file instead of stdout")
    build_parser.add_argument("--scope-id", help="Override the generated CSS scope id")
    build_parser.add_argument("--strict", action="store_true", help="Fail when a src reference cannot be read")

    deps = subparsers.add_parser("deps", help="List the files a component depends on")
    deps.add_argument("filename")

    args = parser.parse_args(argv)

    if args.command == "build": cmd_build(args)
    elif args.command == "deps": cmd_deps(args)
    else: parser.print_help()


if __name__ == "__main__":
    main()
