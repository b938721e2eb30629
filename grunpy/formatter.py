from .tokens import Token

NO_TEXT = "<no text>"

def escape_whitespace(text):
    return text.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")

def type_display_name(token_type, symbolic_names):
    if 0 < token_type < len(symbolic_names) and symbolic_names[token_type] is not None:
        return symbolic_names[token_type]
    return str(token_type)

def format_token(token, symbolic_names=()):
    channel = ",channel={}".format(token.channel) if token.channel > 0 else ""
    text = NO_TEXT if token.text is None else escape_whitespace(token.text)
    return "[@{},{}:{}='{}',<{}>{},{}:{}]".format(
        token.index,
        token.start,
        token.stop,
        text,
        type_display_name(token.type, symbolic_names),
        channel,
        token.line,
        token.column
    )

def format_tokens(tokens, symbolic_names=()):
    for token in tokens:
        if isinstance(token, Token):
            yield format_token(token, symbolic_names)
        else:
            yield str(token)
