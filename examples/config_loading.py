"""config_loading.py"""

from optline.config import load_options

parser = load_options("optline.yaml")

if __name__ == "__main__":
    parser.parse_all()
    print(parser.bindings)
    for name, value in parser.bindings.as_dict().items():
        print(f"{name}={value!r}")
    for name in parser.flags:
        print(f"{name}={parser.get_flag(name)!r}")
