from lispy.reader.parser import NodeKind, SyntaxNode, TokenStream, lex, parse
from lispy.reader.reader import read, read_str
