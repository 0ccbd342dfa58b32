import argparse
import io
import os
import sys

from .diagnostics import VMTranslationError
from .translator import Translator


VM_EXT = ".vm"
ASM_EXT = ".asm"


def collect_inputs(path):
    """Return the .vm files to translate, in translation order."""
    if os.path.isdir(path):
        files = sorted(
            os.path.join(path, name) for name in os.listdir(path)
            if name.endswith(VM_EXT) and os.path.isfile(os.path.join(path, name))
        )
        if not files:
            raise FileNotFoundError(f"no {VM_EXT} files in directory: {path}")
        return files
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")
    if not path.endswith(VM_EXT):
        raise ValueError(f"Expected a {VM_EXT} file: {path}")
    return [path]


def default_output(path):
    path = os.path.normpath(path)
    if os.path.isdir(path):
        name = os.path.basename(os.path.abspath(path))
        return os.path.join(path, name + ASM_EXT)
    return os.path.splitext(path)[0] + ASM_EXT


def file_stem(path):
    return os.path.splitext(os.path.basename(path))[0]


def main(argv=None):
    ap = argparse.ArgumentParser(prog="hackvm", description="VM to Hack assembly translator")
    ap.add_argument("input", help="Input .vm file or directory of .vm files")
    ap.add_argument("-o", "--output", help="Output assembly file (default: <input>.asm)")
    ap.add_argument("--no-bootstrap", action="store_true", help="Do not emit the Sys.init bootstrap")
    ap.add_argument("--no-comments", action="store_true", help="Do not annotate output with VM source")
    ap.add_argument("--debug", action="store_true", help="Print each parsed command to stderr")
    args = ap.parse_args(argv)

    try:
        inputs = collect_inputs(args.input)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = args.output or default_output(args.input)

    # Translate into memory first so a failed run leaves no partial output
    buf = io.StringIO()
    current = args.input
    try:
        with Translator(buf, annotate=not args.no_comments, print_debug=args.debug) as tr:
            if not args.no_bootstrap:
                tr.bootstrap()
            for path in inputs:
                current = path
                with open(path, "r", encoding="utf-8") as f:
                    src = f.read()
                tr.translate_source(file_stem(path), src)
    except (IOError, UnicodeDecodeError) as e:
        print(f"Error: Failed to read input file: {e}", file=sys.stderr)
        sys.exit(1)
    except VMTranslationError as e:
        print(f"Error in {current}:", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        sys.exit(1)

    for warning in tr.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(buf.getvalue())
    except IOError as e:
        print(f"Error: Failed to write output file: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote assembly to {output}")


if __name__ == "__main__":
    main()
