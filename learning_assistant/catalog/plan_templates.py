"""Parcours d'apprentissage prédéfinis utilisés par ``/api/generate-plan``."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Tuple

DEFAULT_TEMPLATE = "python"


def _resource(title: str, url: str, type_: str, description: str) -> Dict[str, str]:
    return {"title": title, "url": url, "type": type_, "description": description}


def _link(title: str, url: str, description: str) -> Dict[str, str]:
    return {"title": title, "url": url, "description": description}


PLAN_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "python": {
        "title": "Python Programming Learning Path",
        "description": "A comprehensive learning path to master Python programming from basics to advanced concepts.",
        "steps": [
            {
                "title": "Python Basics and Syntax",
                "description": "Start with Python fundamentals, syntax, and basic programming concepts.",
                "resources": [
                    _resource("Python for Beginners - Learn Python Programming", "https://www.python.org/about/gettingstarted/", "tutorial", "Official Python getting started guide with installation instructions and basic concepts."),
                    _resource("Python Basics Tutorial", "https://www.w3schools.com/python/", "tutorial", "Interactive tutorial with examples covering Python syntax, variables, data types, and basic operations."),
                    _resource("Python Crash Course - Introduction", "https://nostarch.com/python-crash-course-3rd-edition", "article", "First chapter of the popular Python Crash Course book, covering basic syntax and programming concepts."),
                ],
            },
            {
                "title": "Data Structures in Python",
                "description": "Learn about Python's built-in data structures like lists, dictionaries, sets, and tuples.",
                "resources": [
                    _resource("Python Data Structures Tutorial", "https://realpython.com/python-data-structures/", "article", "Comprehensive guide to Python's built-in data structures with examples and use cases."),
                    _resource("Python Data Structures - Video Course", "https://www.youtube.com/watch?v=R-HLU9Fl5ug", "video", "Visual explanation of Python data structures with practical examples and performance considerations."),
                    _resource("Python Collections - Practice Exercises", "https://pynative.com/python-data-structure-exercise-for-beginners/", "exercise", "Hands-on exercises to practice working with Python data structures and solve common problems."),
                ],
            },
            {
                "title": "Functions and Modules",
                "description": "Create reusable code with functions, understand scope, and organize code with modules.",
                "resources": [
                    _resource("Python Functions Tutorial", "https://www.programiz.com/python-programming/function", "tutorial", "Learn how to define and use functions in Python, including parameters, return values, and scope."),
                    _resource("Python Modules and Packages", "https://realpython.com/python-modules-packages/", "article", "In-depth guide to creating, importing, and using modules and packages to organize Python code."),
                    _resource("Function Practice Project: Temperature Converter", "https://thepythoncode.com/article/build-temperature-converter-app-in-python", "project", "Apply your knowledge of functions by building a practical temperature conversion application."),
                ],
            },
            {
                "title": "Object-Oriented Programming in Python",
                "description": "Master classes, objects, inheritance, and other OOP concepts in Python.",
                "resources": [
                    _resource("Python OOP Tutorial", "https://realpython.com/python3-object-oriented-programming/", "tutorial", "Comprehensive guide to object-oriented programming in Python with practical examples."),
                    _resource("Classes and Objects - Video Course", "https://www.youtube.com/watch?v=-pEs-Bss8Wc", "video", "Visual explanation of classes, objects, inheritance, and polymorphism in Python."),
                    _resource("OOP Project: Banking System", "https://thepythoncode.com/article/create-a-banking-system-using-oop-in-python", "project", "Build a simple banking system to practice OOP concepts like classes, inheritance, and encapsulation."),
                ],
            },
        ],
        "additionalResources": [
            _link("Python Documentation", "https://docs.python.org/3/", "Official Python documentation with comprehensive references for all language features."),
            _link("Python Cookbook: Recipes for Mastering Python 3", "https://www.oreilly.com/library/view/python-cookbook-3rd/9781449357337/", "Collection of practical recipes for solving common Python programming problems."),
            _link("Real Python", "https://realpython.com/", "Website with tutorials, articles, and courses covering a wide range of Python topics from basics to advanced."),
        ],
    },
    "javascript": {
        "title": "JavaScript Development Learning Path",
        "description": "Master JavaScript from fundamentals to advanced concepts for web development.",
        "steps": [
            {
                "title": "JavaScript Basics",
                "description": "Learn JavaScript syntax, variables, data types, and control structures.",
                "resources": [
                    _resource("JavaScript Basics - MDN Web Docs", "https://developer.mozilla.org/en-US/docs/Learn/Getting_started_with_the_web/JavaScript_basics", "tutorial", "Mozilla's beginner-friendly introduction to JavaScript with interactive examples."),
                    _resource("JavaScript Fundamentals", "https://javascript.info/first-steps", "tutorial", "Modern JavaScript tutorial covering language fundamentals with clear explanations."),
                    _resource("Intro to JavaScript - Video Course", "https://www.youtube.com/watch?v=W6NZfCO5SIk", "video", "One-hour crash course covering essential JavaScript concepts for beginners."),
                ],
            },
            {
                "title": "Functions and Objects",
                "description": "Master JavaScript functions, objects, and this keyword.",
                "resources": [
                    _resource("JavaScript Functions - MDN", "https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Functions", "article", "Comprehensive guide to functions, parameters, and scope in JavaScript."),
                    _resource("JavaScript Objects In Detail", "https://www.javascripttutorial.net/javascript-objects/", "tutorial", "Learn to create, access, and manipulate objects in JavaScript."),
                    _resource("Understanding This in JavaScript", "https://yehudakatz.com/2011/08/11/understanding-javascript-function-invocation-and-this/", "article", 'Detailed explanation of how the "this" keyword works in different contexts.'),
                ],
            },
            {
                "title": "DOM Manipulation",
                "description": "Learn to interact with web pages by manipulating the Document Object Model.",
                "resources": [
                    _resource("DOM Manipulation - MDN", "https://developer.mozilla.org/en-US/docs/Learn/JavaScript/Client-side_web_APIs/Manipulating_documents", "tutorial", "Mozilla's guide to selecting elements and manipulating web page content with JavaScript."),
                    _resource("JavaScript DOM Manipulation - Video Course", "https://www.youtube.com/watch?v=5fb2aPlgoys", "video", "Video series demonstrating how to select, modify, and create HTML elements with JavaScript."),
                    _resource("Interactive Dashboard Project", "https://www.freecodecamp.org/news/javascript-projects-for-beginners/#data-dashboard-project", "project", "Build a simple data dashboard to practice DOM manipulation and event handling."),
                ],
            },
            {
                "title": "Asynchronous JavaScript",
                "description": "Master async programming with callbacks, promises, and async/await.",
                "resources": [
                    _resource("Asynchronous JavaScript - MDN", "https://developer.mozilla.org/en-US/docs/Learn/JavaScript/Asynchronous", "tutorial", "Mozilla's guide to asynchronous programming concepts in JavaScript."),
                    _resource("JavaScript Promises and Async/Await", "https://javascript.info/async", "article", "In-depth explanation of promises, async/await, and error handling."),
                    _resource("Weather App Project", "https://www.theodinproject.com/lessons/node-path-javascript-weather-app", "project", "Build a weather app that fetches data from an API using async JavaScript."),
                ],
            },
        ],
        "additionalResources": [
            _link("JavaScript - MDN Web Docs", "https://developer.mozilla.org/en-US/docs/Web/JavaScript", "Mozilla's comprehensive JavaScript documentation with tutorials and references."),
            _link("Eloquent JavaScript", "https://eloquentjavascript.net/", "Free online book covering JavaScript from basics to advanced concepts."),
            _link("JavaScript.info", "https://javascript.info/", "Modern JavaScript tutorial with clear explanations and interactive examples."),
        ],
    },
    "react": {
        "title": "React Development Learning Path",
        "description": "Master React for building modern user interfaces and web applications.",
        "steps": [
            {
                "title": "React Fundamentals",
                "description": "Learn the basics of React, components, and JSX syntax.",
                "resources": [
                    _resource("React Official Tutorial", "https://react.dev/learn", "tutorial", "Official React tutorial covering the fundamentals of React development."),
                    _resource("React Beginner's Guide", "https://www.freecodecamp.org/news/react-beginners-guide/", "article", "Comprehensive beginner's guide to React with practical examples."),
                    _resource("React Crash Course", "https://www.youtube.com/watch?v=bMknfKXIFA8", "video", "Free video course covering React fundamentals in a hands-on manner."),
                ],
            },
            {
                "title": "State Management in React",
                "description": "Learn to manage state in React with hooks, context, and state libraries.",
                "resources": [
                    _resource("React Hooks Tutorial", "https://react.dev/reference/react", "tutorial", "Official guide to using React hooks like useState, useEffect, and useContext."),
                    _resource("State Management in React", "https://kentcdodds.com/blog/application-state-management-with-react", "article", "In-depth article on approaches to state management in React applications."),
                    _resource("Todo App with React Hooks", "https://www.digitalocean.com/community/tutorials/how-to-build-a-react-to-do-app-with-react-hooks", "project", "Build a todo application to practice state management with React hooks."),
                ],
            },
            {
                "title": "React Routing and Navigation",
                "description": "Implement navigation in single-page React applications.",
                "resources": [
                    _resource("React Router Tutorial", "https://reactrouter.com/en/main/start/tutorial", "tutorial", "Official React Router tutorial for handling navigation in React applications."),
                    _resource("Navigation for SPAs", "https://ui.dev/react-router-tutorial", "article", "Comprehensive guide to implementing navigation in single-page applications."),
                    _resource("Multi-page React Application", "https://www.freecodecamp.org/news/react-router-in-5-minutes/", "exercise", "Hands-on exercise to practice implementing routing in a React application."),
                ],
            },
            {
                "title": "API Integration and Data Fetching",
                "description": "Learn to fetch and display data from APIs in React applications.",
                "resources": [
                    _resource("Fetching Data in React", "https://www.robinwieruch.de/react-hooks-fetch-data/", "tutorial", "Tutorial on using React hooks to fetch and display data from APIs."),
                    _resource("React Query Guide", "https://tanstack.com/query/latest/docs/react/overview", "article", "Introduction to React Query for efficient data fetching and state management."),
                    _resource("Recipe App Project", "https://www.freecodecamp.org/news/create-a-recipe-app-with-react/", "project", "Build a recipe application that fetches and displays data from a food API."),
                ],
            },
        ],
        "additionalResources": [
            _link("React Documentation", "https://react.dev/", "Official React documentation with comprehensive guides and API references."),
            _link("React Patterns", "https://reactpatterns.com/", "Collection of common design patterns and best practices for React development."),
            _link("The Road to React", "https://www.roadtoreact.com/", "Book covering React fundamentals and advanced concepts with practical examples."),
        ],
    },
    "web-development": {
        "title": "Web Development Learning Path",
        "description": "Master the fundamentals of web development, including HTML, CSS, and JavaScript.",
        "steps": [
            {
                "title": "HTML and CSS Fundamentals",
                "description": "Learn the building blocks of web pages: HTML for structure and CSS for styling.",
                "resources": [
                    _resource("HTML & CSS Basics - MDN", "https://developer.mozilla.org/en-US/docs/Learn/Getting_started_with_the_web", "tutorial", "Mozilla's beginner-friendly introduction to HTML and CSS."),
                    _resource("HTML & CSS Crash Course", "https://www.youtube.com/watch?v=916GWv2Qs08", "video", "Quick video introduction to HTML and CSS fundamentals."),
                    _resource("Build Your First Website", "https://www.freecodecamp.org/news/html-css-tutorial-build-a-recipe-website/", "project", "Practice HTML and CSS by building a simple recipe website."),
                ],
            },
            {
                "title": "JavaScript Basics",
                "description": "Add interactivity to web pages with JavaScript fundamentals.",
                "resources": [
                    _resource("JavaScript Basics - MDN", "https://developer.mozilla.org/en-US/docs/Learn/JavaScript/First_steps", "tutorial", "Mozilla's introduction to JavaScript for web development."),
                    _resource("JavaScript for Web Development", "https://javascript.info/document", "article", "Guide to using JavaScript to manipulate web pages and handle user interactions."),
                    _resource("Interactive Form Validation", "https://www.freecodecamp.org/news/form-validation-with-html5-and-javascript/", "exercise", "Practice JavaScript by implementing form validation on a web page."),
                ],
            },
            {
                "title": "Responsive Web Design",
                "description": "Make websites that work well on all devices and screen sizes.",
                "resources": [
                    _resource("Responsive Web Design Fundamentals", "https://web.dev/responsive-web-design-basics/", "tutorial", "Google's guide to creating websites that work well on mobile, tablet, and desktop."),
                    _resource("CSS Flexbox and Grid", "https://css-tricks.com/snippets/css/a-guide-to-flexbox/", "article", "Visual guide to CSS Flexbox and Grid layouts for responsive designs."),
                    _resource("Responsive Portfolio Project", "https://www.freecodecamp.org/news/how-to-create-a-portfolio-website-using-html-css-javascript-and-bootstrap/", "project", "Build a responsive portfolio website to showcase your work."),
                ],
            },
            {
                "title": "Frontend Frameworks",
                "description": "Learn a modern frontend framework like React, Vue, or Angular.",
                "resources": [
                    _resource("React Fundamentals", "https://react.dev/learn/tutorial-tic-tac-toe", "tutorial", "Official React tutorial building a simple game application."),
                    _resource("Vue.js Guide", "https://vuejs.org/guide/introduction.html", "tutorial", "Official Vue.js guide for building interactive web interfaces."),
                    _resource("Angular Tour of Heroes", "https://angular.io/tutorial", "tutorial", "Official Angular tutorial building a complete application."),
                ],
            },
        ],
        "additionalResources": [
            _link("MDN Web Docs", "https://developer.mozilla.org/", "Comprehensive documentation for web technologies including HTML, CSS, and JavaScript."),
            _link("Frontend Masters", "https://frontendmasters.com/", "Advanced courses on all aspects of frontend web development."),
            _link("CSS-Tricks", "https://css-tricks.com/", "Website with articles, tutorials, and guides on CSS and frontend development."),
        ],
    },
    "data-science": {
        "title": "Data Science Learning Path",
        "description": "Master the essential skills for data science and analytics.",
        "steps": [
            {
                "title": "Python for Data Science",
                "description": "Learn Python programming fundamentals with a focus on data analysis.",
                "resources": [
                    _resource("Python for Data Science Handbook", "https://jakevdp.github.io/PythonDataScienceHandbook/", "tutorial", "Comprehensive free book covering Python basics for data science applications."),
                    _resource("Introduction to Python for Data Science", "https://www.datacamp.com/courses/intro-to-python-for-data-science", "tutorial", "Interactive course introducing Python specifically for data science applications."),
                    _resource("NumPy and Pandas Crash Course", "https://www.youtube.com/watch?v=vmEHCJofslg", "video", "Video tutorial on NumPy and Pandas, the essential libraries for data manipulation in Python."),
                ],
            },
            {
                "title": "Data Visualization",
                "description": "Learn to create compelling visualizations to communicate data insights.",
                "resources": [
                    _resource("Data Visualization with Matplotlib and Seaborn", "https://www.kaggle.com/learn/data-visualization", "tutorial", "Kaggle's tutorial on creating effective data visualizations with Python libraries."),
                    _resource("Visualization Best Practices", "https://www.tableau.com/learn/articles/data-visualization-tips", "article", "Guide to best practices for creating clear and effective data visualizations."),
                    _resource("Dashboard Creation Project", "https://www.analyticsvidhya.com/blog/2020/12/build-powerful-dashboards-using-plotly-dash/", "project", "Build an interactive dashboard to visualize and explore a dataset of your choice."),
                ],
            },
            {
                "title": "Statistical Analysis",
                "description": "Master statistical concepts and techniques for data analysis.",
                "resources": [
                    _resource("Statistics for Data Science", "https://www.coursera.org/learn/statistics-for-data-science-python", "tutorial", "Course covering statistical concepts fundamental to data science."),
                    _resource("Practical Statistics for Data Scientists", "https://www.oreilly.com/library/view/practical-statistics-for/9781491952955/", "article", "Book focusing on statistical methods specifically relevant to data science."),
                    _resource("A/B Testing Project", "https://www.kaggle.com/code/tammyrotem/ab-tests-with-python", "exercise", "Practice designing and analyzing A/B tests to make data-driven decisions."),
                ],
            },
            {
                "title": "Machine Learning Fundamentals",
                "description": "Learn the basics of machine learning algorithms and their applications.",
                "resources": [
                    _resource("Machine Learning Crash Course", "https://developers.google.com/machine-learning/crash-course", "tutorial", "Google's comprehensive introduction to machine learning concepts."),
                    _resource("Scikit-Learn Tutorial", "https://scikit-learn.org/stable/tutorial/index.html", "tutorial", "Official tutorial for Scikit-Learn, the most popular Python machine learning library."),
                    _resource("Titanic Machine Learning Project", "https://www.kaggle.com/competitions/titanic/overview", "project", "Classic machine learning project to predict Titanic passenger survival."),
                ],
            },
        ],
        "additionalResources": [
            _link("Kaggle", "https://www.kaggle.com/", "Platform with datasets, competitions, and tutorials for data science and machine learning."),
            _link("Towards Data Science", "https://towardsdatascience.com/", "Publication with articles on all aspects of data science from industry practitioners."),
            _link("Data Science Stack Exchange", "https://datascience.stackexchange.com/", "Q&A site for data science professionals and enthusiasts."),
        ],
    },
}

# Ordre d'évaluation important : le premier groupe qui correspond l'emporte.
TEMPLATE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("javascript", ("javascript", "js")),
    ("react", ("react", "frontend framework")),
    ("web-development", ("web", "html", "css", "frontend")),
    ("data-science", ("data science", "machine learning", "data analysis", "statistics")),
)


def select_template_key(text: str) -> str:
    """Choisit un parcours à partir de mots-clés (simple recherche de sous-chaîne)."""
    lowered = (text or "").lower()
    for key, keywords in TEMPLATE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return key
    return DEFAULT_TEMPLATE


def get_template(key: str) -> Dict[str, Any]:
    return copy.deepcopy(PLAN_TEMPLATES.get(key) or PLAN_TEMPLATES[DEFAULT_TEMPLATE])


def available_templates() -> List[str]:
    return list(PLAN_TEMPLATES)
