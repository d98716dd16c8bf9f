VERSION = (0, 1, 0)
VERSION_STR = f"{VERSION[0]}.{VERSION[1]}.{VERSION[2]}{'-' +  str(VERSION[-1]) if len(VERSION) > 3 else ''}"


ARGV0 = "optfold"
DESCRIPTION = "A schema-less command-line token classifier driven by a callback"
EXTRA_ARGS_ENV = "OPTFOLD_EXTRA_ARGS"
GRAPH_FILE = "optfold.gv"
