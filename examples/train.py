#!/usr/bin/env python
# Train a toy model.
#
# Usage: train.py [options] [DATASET...]

from optline import OptionParser
from optline.parser.values import regex, value_many

parser = OptionParser(program="train.py")
parser.add_option("-t|--train-file", "train_file", "FILE", "set variable train_file")
parser.add_option("input-file", "input_file", "FILE", "set variable input_file")


def summation(ctx):
    numbers = value_many(ctx, regex("^[0-9]+$"))
    ctx.bindings.set("total", sum(int(number) for number in numbers))


parser.add_option("sum", summation, "INT+", "add the numbers that follow")
parser.define_integer("epochs", 10, "training epochs")
parser.define_float("-r|--learning-rate", "0.01", "optimizer step size")
parser.define_boolean("-v|--verbose", False, "log every epoch")
parser.add_positional("datasets", "extra datasets")
parser.add_config_file_option()
parser.add_help()

if __name__ == "__main__":
    parser.parse_all()
    print(f"train_file={parser.bindings.get('train_file')}")
    print(f"input_file={parser.bindings.get('input_file')}")
    print(f"total={parser.bindings.get('total', 0)}")
    print(f"datasets={parser.bindings.get('datasets', [])}")
    for name in parser.flags:
        print(f"{name}={parser.get_flag(name)}")
