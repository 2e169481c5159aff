"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface): whatever the command line leaves out
is asked for interactively, unless non-interactive mode is on, in which case defaults are used or the run fails.

Typical usage example:

    rsakeys pair --modulus 3233 --private-exponent 413
    rsakeys inspect --source P:keypair.json
    OR
    python -m rsakeys
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsakeys


def parse_int(value: str) -> int:
    """Parse an integer in any Python literal base (`3233`, `0xca1`, `0b101`)."""
    return int(value, 0)


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Keys.",
            choices=["armor", "pair", "inspect", "pkcs1"],
        ),
    "armor":
        HelpData("Print the armored text of a key."),
    "pair":
        HelpData("Write the JSON record of a key pair."),
    "inspect":
        HelpData("Inspect armored key text, a PKCS#1 public key or a JSON key pair record."),
    "pkcs1":
        HelpData("Convert armored key text to a PKCS#1 public key."),
    "kind":
        HelpData(
            description="Kind of key to armor.",
            choices=["PUBLIC", "PRIVATE"],
            default="PRIVATE",
        ),
    "modulus":
        HelpData(
            description="The modulus (n) of the key.",
            format=parse_int,
        ),
    "private_exponent":
        HelpData(
            description="The private exponent (d) of the key.",
            format=parse_int,
        ),
    "source":
        HelpData(
            description="Key material or path to file containing it. If Path start with `P:`",
            format=str,
        ),
    "output":
        HelpData(
            description="Destination file of the key pair record. `-` prints it instead.",
            format=pathlib.Path,
            default=pathlib.Path("-"),
        ),
    "indent":
        HelpData(
            description="JSON indentation of the key pair record.",
            format=int,
            advanced=True,
            default=2,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "armor": ("kind", "modulus", "private_exponent"),
    "pair": ("modulus", "private_exponent", "output", "indent"),
    "inspect": ("source",),
    "pkcs1": ("source",),
}

source = argparse.ArgumentParser(add_help=False)
source.add_argument("--source", "-s", type=help_dict["source"].format, help=help_dict["source"].description)
numbers = argparse.ArgumentParser(add_help=False)
numbers.add_argument("--modulus", "-m", type=help_dict["modulus"].format, help=help_dict["modulus"].description)
numbers.add_argument("--private-exponent",
                     "-d",
                     type=help_dict["private_exponent"].format,
                     help=help_dict["private_exponent"].description)
corep = argparse.ArgumentParser(prog="rsakeys")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsakeys.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Log diagnostic details to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

armor = commands.add_parser("armor", parents=[numbers], help=help_dict["armor"].description)
armor.add_argument("--kind", "-k", choices=help_dict["kind"].choices, help=help_dict["kind"].description)

pair = commands.add_parser("pair", parents=[numbers], help=help_dict["pair"].description)
pair.add_argument("--output", "-o", type=help_dict["output"].format, help=help_dict["output"].description)
pair.add_argument("--indent", "-i", type=help_dict["indent"].format, help=help_dict["indent"].description)
pair.add_argument("--overwrite", "-O", action="store_const", const="Y", help=help_dict["overwrite"].description)

inspect = commands.add_parser("inspect", parents=[source], help=help_dict["inspect"].description)
pkcs1 = commands.add_parser("pkcs1", parents=[source], help=help_dict["pkcs1"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_source(src: str) -> str:
    """Parse source for path-notice."""
    if src.startswith("P:"):
        with open(src[2:], "r", encoding="utf-8") as f:
            src = f.read()
    return src


def describe_key(key: rsakeys.Key, label: str = "Key") -> list[str]:
    """Summarize a key without revealing its private exponent."""
    lines = [
        f"{label}: RSA {key.kind.value}",
        f"  Modulus: {key.modulus}",
        f"  Modulus size: {key.modulus.bit_length()} bits",
        f"  Public exponent: {key.public_exponent}",
    ]
    if isinstance(key, rsakeys.PrivateKey):
        lines.append(f"  Private exponent size: {key.private_exponent.bit_length()} bits")
    return lines


def parse_source(text: str) -> rsakeys.Key | rsakeys.KeyPair:
    """Parse a JSON key pair record, PKCS#1 public key PEM or armored key text.

    PKCS#1 PEM shares the `RSA PUBLIC KEY` frame with armored text, so it is tried first on such input.

    Raises:
        KeyParseError: If the material can not be parsed.
    """
    if text.lstrip().startswith("{"):
        return rsakeys.KeyPair.from_json(text).unwrap()
    if text.lstrip().startswith(rsakeys.KeyKind.PUBLIC.header):
        res = rsakeys.from_pkcs1_pem(text)
        if res or res.error is rsakeys.ParseFailure.UNSUPPORTED_EXPONENT:
            return res.unwrap()
    return rsakeys.try_parse_armored_text(text).unwrap()


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                        stream=sys.stderr)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Keys!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if reqs == "private_exponent" and getattr(args, "kind", None) == "PUBLIC":
            continue
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "armor":
                key = rsakeys.Key.new(args.modulus, rsakeys.KeyKind(args.kind), args.private_exponent)
                pspr("Armored key:")
                print(key.to_armored_text(), end="")
            case "pair":
                kp = rsakeys.KeyPair.generate(args.modulus, args.private_exponent)
                record = kp.to_json(indent=args.indent or None)
                if str(args.output) == "-":
                    pspr("Key pair record:")
                    print(record)
                else:
                    if args.output.exists():
                        rs = getattr(args, "overwrite", None)
                        if rs is None:
                            rs = choice_handler("overwrite", pstatus, pspr)
                        if rs == "N":
                            print("Destination key pair record already exists!")
                            return
                    with open(args.output, "w", encoding="utf-8") as f:
                        f.write(record + "\n")
                    pspr("\nKey pair record written!")
            case "inspect":
                parsed = parse_source(check_source(args.source))
                if isinstance(parsed, rsakeys.KeyPair):
                    print("\n".join(describe_key(parsed.private_key, "Private key")))
                    print("\n".join(describe_key(parsed.public_key, "Public key")))
                else:
                    print("\n".join(describe_key(parsed)))
            case "pkcs1":
                key = parse_source(check_source(args.source))
                if isinstance(key, rsakeys.KeyPair):
                    key = key.public_key
                pspr("PKCS#1 public key:")
                print(rsakeys.to_pkcs1_pem(key.public_key if isinstance(key, rsakeys.PrivateKey) else key), end="")
    except (rsakeys.InvalidKeyMaterial, rsakeys.KeyParseError) as exc:
        print(f"Key handling failed! {exc}")
        sys.exit(1)
    pspr("Thank you for using RSA Keys!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
