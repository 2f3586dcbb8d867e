"""Return-type classification of jQuery collection methods and default settings."""

from enum import Enum

SETTINGS_NAMESPACE: str = "no-jquery"

DEFAULT_CONSTRUCTOR_ALIASES: frozenset[str] = frozenset({"$", "jQuery"})
DEFAULT_VARIABLE_PATTERN: str = r"^\$."


class PluginClassification(str, Enum):
    """User classification of a plugin or undocumented collection method."""

    NEVER = "never"
    ACCESSOR = "accessor"
    VALUE_ACCESSOR = "valueAccessor"


class ClassifierMode(str, Enum):
    """What a positive classification requires of the chain."""

    COLLECTION = "collection"
    UTIL = "util"
    COLLECTION_UTIL = "collection-util"


# Methods which always return something other than a collection
NON_COLLECTION_RETURNING_METHODS: frozenset[str] = frozenset(
    {
        "get",
        "hasClass",
        "index",
        "is",
        "position",
        "promise",
        "serialize",
        "serializeArray",
        "toArray",
        "triggerHandler",
    }
)

# Getters when called without arguments
NON_COLLECTION_RETURNING_ACCESSORS: frozenset[str] = frozenset(
    {
        "height",
        "html",
        "innerHeight",
        "innerWidth",
        "offset",
        "scrollLeft",
        "scrollTop",
        "text",
        "val",
        "width",
    }
)

# Key/value getters: no argument, or a single key that is not an object literal
NON_COLLECTION_RETURNING_VALUE_ACCESSORS: frozenset[str] = frozenset(
    {"attr", "css", "data", "prop"})

SIZING_METHODS: frozenset[str] = frozenset({"outerWidth", "outerHeight"})
QUEUE_METHOD: str = "queue"

ALL_KNOWN_METHODS: frozenset[str] = frozenset(
    {
        "add", "addBack", "addClass", "after", "ajaxComplete", "ajaxError",
        "ajaxSend", "ajaxStart", "ajaxStop", "ajaxSuccess", "andSelf",
        "animate", "append", "appendTo", "attr", "before", "bind", "blur",
        "change", "children", "clearQueue", "click", "clone", "closest",
        "contents", "contextmenu", "css", "data", "dblclick", "delay",
        "delegate", "dequeue", "detach", "die", "each", "empty", "end", "eq",
        "error", "even", "fadeIn", "fadeOut", "fadeTo", "fadeToggle",
        "filter", "find", "finish", "first", "focus", "focusin", "focusout",
        "get", "has", "hasClass", "height", "hide", "hover", "html", "index",
        "innerHeight", "innerWidth", "insertAfter", "insertBefore", "is",
        "keydown", "keypress", "keyup", "last", "live", "load", "map",
        "mousedown", "mouseenter", "mouseleave", "mousemove", "mouseout",
        "mouseover", "mouseup", "next", "nextAll", "nextUntil", "not", "odd",
        "off", "offset", "offsetParent", "on", "one", "outerHeight",
        "outerWidth", "parent", "parents", "parentsUntil", "position",
        "prepend", "prependTo", "prev", "prevAll", "prevUntil", "promise",
        "prop", "pushStack", "queue", "ready", "remove", "removeAttr",
        "removeClass", "removeData", "removeProp", "replaceAll",
        "replaceWith", "resize", "scroll", "scrollLeft", "scrollTop",
        "select", "serialize", "serializeArray", "show", "siblings", "size",
        "slice", "slideDown", "slideToggle", "slideUp", "stop", "submit",
        "text", "toArray", "toggle", "toggleClass", "trigger",
        "triggerHandler", "unbind", "undelegate", "unload", "unwrap", "val",
        "width", "wrap", "wrapAll", "wrapInner",
    }
)

# Documentation links
API_DOCS_URL: str = "https://api.jquery.com/"
UNLINKED_COLLECTION_METHODS: frozenset[str] = frozenset({"hasData"})
UNDOCUMENTED_UTILITIES: frozenset[str] = frozenset(
    {"attr", "camelCase", "clone", "css", "filter", "find", "prop", "text"})

ALLOW_GET_OR_SET_VALUES: tuple[str, ...] = ("none", "get", "set")
