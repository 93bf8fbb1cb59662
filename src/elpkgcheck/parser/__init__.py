"""Header, literal and local-variable parsing for package source files."""

from elpkgcheck.parser.dependencies import DependencyListParser
from elpkgcheck.parser.descriptor import DescriptorError, DescriptorParser, PackageHeaderParser
from elpkgcheck.parser.headers import HeaderScanner
from elpkgcheck.parser.local_vars import LexicalBindingDetector, LocalVariablesError
from elpkgcheck.parser.sexp import SexpParseError, Symbol, format_sexp, read_from_string
from elpkgcheck.parser.source import SourceSafetyError, SourceText

__all__ = [
    "DependencyListParser",
    "DescriptorError",
    "DescriptorParser",
    "HeaderScanner",
    "LexicalBindingDetector",
    "LocalVariablesError",
    "PackageHeaderParser",
    "SexpParseError",
    "SourceSafetyError",
    "SourceText",
    "Symbol",
    "format_sexp",
    "read_from_string",
]
