"""Documents de référence utilisés par le chat de recherche (``/api/rag``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from learning_assistant.catalog.levels import normalize_topic

DEFAULT_TOPIC = "python"


@dataclass(frozen=True)
class KnowledgeDocument:
    title: str
    url: str
    content: str
    keywords: Tuple[str, ...]

    @property
    def is_introduction(self) -> bool:
        return "introduction" in self.keywords or "Introduction" in self.title


KNOWLEDGE_BASE: Dict[str, Tuple[KnowledgeDocument, ...]] = {
    "python": (
        KnowledgeDocument(
            title="Python Introduction",
            url="https://docs.python.org/3/tutorial/introduction.html",
            content="Python is a high-level, interpreted programming language known for its readability and simplicity. It uses indentation to define code blocks and supports multiple programming paradigms, including procedural, object-oriented, and functional programming.",
            keywords=("python", "introduction", "programming", "language", "basics", "what is"),
        ),
        KnowledgeDocument(
            title="Python Variables",
            url="https://docs.python.org/3/tutorial/introduction.html#using-python-as-a-calculator",
            content='Python variables are dynamically typed, meaning you don\'t need to declare their type explicitly. Python handles this automatically based on the value assigned. For example: x = 5 creates an integer variable, and x = "Hello" creates a string variable. Variables can refer to values of any type, and the type can change during program execution.',
            keywords=("variable", "variables", "assign", "assignment", "type", "typing", "dynamic"),
        ),
        KnowledgeDocument(
            title="Python Lists",
            url="https://docs.python.org/3/tutorial/datastructures.html#more-on-lists",
            content="Python lists are ordered, mutable collections that can contain elements of different types. You can create lists using square brackets, e.g., [1, 2, 3]. Common operations include append() to add an element, extend() to add another list, insert() to add at a specific position, remove() to remove by value, and pop() to remove by index.",
            keywords=("list", "lists", "array", "arrays", "collection", "append", "extend", "insert", "remove"),
        ),
        KnowledgeDocument(
            title="Python Dictionaries",
            url="https://docs.python.org/3/tutorial/datastructures.html#dictionaries",
            content='Python dictionaries are key-value pairs that provide an efficient way to store and retrieve data. You can create dictionaries using curly braces, e.g., {"name": "John", "age": 30}. Accessing values is done with square brackets: dict_name["key"]. Common methods include .keys(), .values(), .items(), .get(), and .update(). Dictionaries are mutable and can contain values of any type.',
            keywords=("dictionary", "dictionaries", "dict", "hash", "map", "key", "value", "pairs", "mapping"),
        ),
        KnowledgeDocument(
            title="Python Functions",
            url="https://docs.python.org/3/tutorial/controlflow.html#defining-functions",
            content='Python functions are defined using the "def" keyword, followed by the function name and parameters. For example, "def greet(name): return f\'Hello, {name}!\'". Functions can have default parameter values like "def greet(name="World")" and can accept variable numbers of arguments using *args and **kwargs. Functions return None by default if no return statement is used.',
            keywords=("function", "functions", "def", "define", "parameter", "parameters", "return", "argument", "arguments"),
        ),
        KnowledgeDocument(
            title="Python Classes and Objects",
            url="https://docs.python.org/3/tutorial/classes.html",
            content='Python classes are defined with the "class" keyword. A simple class definition might look like: "class Person: def __init__(self, name): self.name = name". The __init__ method is a special method that initializes class instances. To create an object: "p = Person("John")". Classes support inheritance, method overriding, and special methods like __str__ for string representation.',
            keywords=("class", "classes", "object", "objects", "oop", "inheritance", "instance", "init", "method", "methods"),
        ),
        KnowledgeDocument(
            title="Python List Comprehensions",
            url="https://docs.python.org/3/tutorial/datastructures.html#list-comprehensions",
            content="List comprehensions in Python provide a concise way to create lists. The syntax is: [expression for item in iterable if condition]. For example, [x**2 for x in range(10) if x % 2 == 0] creates a list of squares of even numbers. They are more readable and often faster than equivalent for loops.",
            keywords=("list comprehension", "comprehension", "comprehensions", "expression", "generate", "generator"),
        ),
        KnowledgeDocument(
            title="Python Exceptions",
            url="https://docs.python.org/3/tutorial/errors.html",
            content="Python's exception handling is done using try, except, else, and finally blocks. For example: \"try: result = x/y except ZeroDivisionError: print('Cannot divide by zero')\". The else clause executes if no exception occurs, and the finally clause always executes. You can also create custom exceptions by inheriting from Exception class.",
            keywords=("exception", "exceptions", "try", "except", "finally", "error", "errors", "handling"),
        ),
        KnowledgeDocument(
            title="Python Arrays",
            url="https://docs.python.org/3/library/array.html",
            content="Python arrays can be created using the array module, which provides a space-efficient way to store homogeneous data. Unlike lists, arrays can only contain items of the same data type. For example: \"import array; arr = array.array('i', [1, 2, 3])\". The first argument is a type code indicating the data type.",
            keywords=("array", "arrays", "buffer", "homogeneous", "sequence", "efficient"),
        ),
    ),
    "javascript": (
        KnowledgeDocument(
            title="JavaScript Introduction",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Introduction",
            content="JavaScript is a high-level, interpreted programming language that conforms to the ECMAScript specification. It's primarily used for web development but has expanded to server-side with Node.js and other environments. It supports multiple paradigms including object-oriented, functional, and event-driven programming.",
            keywords=("javascript", "introduction", "basics", "what is", "ecmascript"),
        ),
        KnowledgeDocument(
            title="JavaScript Variables",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Grammar_and_types#declarations",
            content='Variables in JavaScript are declared using let, const, or var keywords. "let" and "const" were introduced in ES6 and are block-scoped, while "var" is function-scoped. "const" creates a constant reference to a value that cannot be reassigned. Example: "let x = 5; const PI = 3.14; var name = \'John\';"',
            keywords=("variable", "variables", "let", "const", "var", "declaration", "scope"),
        ),
        KnowledgeDocument(
            title="JavaScript Arrays",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Indexed_collections",
            content='JavaScript arrays are ordered collections of values that can be of any type. They are created using square brackets, e.g., [1, "hello", true]. Arrays have methods like push() to add elements, pop() to remove from the end, shift() to remove from the beginning, and slice() to create a new array. Array.map(), Array.filter(), and Array.reduce() are powerful methods for transforming arrays.',
            keywords=("array", "arrays", "list", "collection", "push", "pop", "map", "filter", "reduce"),
        ),
        KnowledgeDocument(
            title="JavaScript Functions",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Functions",
            content='JavaScript functions can be regular functions, arrow functions, or function expressions. Arrow functions, introduced in ES6, provide a more concise syntax and do not have their own "this" binding. Examples: "function add(a, b) { return a + b; }" (regular), "const add = (a, b) => a + b;" (arrow), and "const add = function(a, b) { return a + b; }" (expression).',
            keywords=("function", "functions", "arrow", "expression", "method", "callback", "return"),
        ),
        KnowledgeDocument(
            title="JavaScript Objects",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Working_with_Objects",
            content="JavaScript objects are collections of key-value pairs where keys are strings (or Symbols) and values can be any data type. They can be created using object literals: \"const person = { name: 'John', age: 30 };\", with constructors: \"const person = new Object();\", or with the class syntax (ES6+). Properties can be accessed using dot notation (person.name) or bracket notation (person['name']).",
            keywords=("object", "objects", "property", "properties", "method", "methods", "key", "value"),
        ),
        KnowledgeDocument(
            title="JavaScript Promises",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Using_promises",
            content='Promises in JavaScript represent the eventual completion (or failure) of an asynchronous operation and its resulting value. A Promise is in one of these states: pending, fulfilled, or rejected. The Promise API includes methods like then() to handle success, catch() to handle errors, and finally() for cleanup. Example: "fetch(url).then(response => response.json()).catch(error => console.log(error));"',
            keywords=("promise", "promises", "async", "asynchronous", "then", "catch", "finally", "resolve", "reject"),
        ),
        KnowledgeDocument(
            title="JavaScript Async/Await",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Asynchronous_JavaScript",
            content='The async/await syntax in JavaScript provides a more intuitive way to work with Promises. An async function returns a Promise, and the await keyword can be used to pause execution until a Promise is resolved or rejected. Example: "async function fetchData() { try { const response = await fetch(url); const data = await response.json(); return data; } catch (error) { console.log(error); } }"',
            keywords=("async", "await", "asynchronous", "promise", "promises", "function"),
        ),
        KnowledgeDocument(
            title="JavaScript Closures",
            url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/Closures",
            content='JavaScript closures are created when a function accesses variables from its outer lexical scope, even after the outer function has returned. This is powerful for data encapsulation and creating private variables. Example: "function counter() { let count = 0; return function() { return ++count; }; }" creates a closure where the inner function maintains access to count even after counter() has finished execution.',
            keywords=("closure", "closures", "scope", "lexical", "encapsulation", "private", "variables"),
        ),
    ),
}


def get_documents(topic: str | None) -> Tuple[KnowledgeDocument, ...]:
    """Documents d'un sujet; un sujet inconnu retombe sur Python."""
    return KNOWLEDGE_BASE.get(normalize_topic(topic)) or KNOWLEDGE_BASE[DEFAULT_TOPIC]


def get_introduction(topic: str | None) -> KnowledgeDocument:
    documents = get_documents(topic)
    return next((doc for doc in documents if doc.is_introduction), documents[0])
