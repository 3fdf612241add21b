import uvicorn
from relayq import Container, FieldDefinition
from relayq.exceptions import InvalidGlobalId
from relayq.gql.alias import Boolean, Field, NonNull, String
from relayq.gql.global_id import GlobalId
from relayq.log import setup_logging
from relayq.server.exception import http_exception
from relayq.server.routes import get_graphiql_route, get_graphql_route
from starlette.applications import Starlette
from starlette.exceptions import HTTPException

TODOS = {}

container = Container()


def todo_exists(attribute, value, parameters, data):
    try:
        return int(GlobalId.decode_id(value)) in TODOS
    except (InvalidGlobalId, ValueError):
        return False


container.validator.extend("todo_exists", todo_exists, "The {attribute} does not match any todo.")


##########
# Fields #
##########


class TodoIdField(FieldDefinition):
    def type(self):
        return "ID!"

    def resolve(self, root, args=None, context=None, info=None):
        return self.global_id.encode("Todo", root["id"])


class TodosQuery(FieldDefinition):
    def type(self):
        return "[Todo!]!"

    def args(self):
        return {"done": {"type": Boolean, "description": "Only todos in this state"}}

    def resolve(self, root, args, context=None, info=None):
        done = args.get("done")
        return [todo for todo in TODOS.values() if done is None or todo["done"] == done]


class CreateTodoMutation(FieldDefinition):
    def type(self):
        return "Todo!"

    def args(self):
        return {"title": {"type": String, "rules": "required|min:3|max:80"}}

    def resolve(self, root, args, context=None, info=None):
        todo = {"id": len(TODOS) + 1, "title": args["title"], "done": False}
        TODOS[todo["id"]] = todo
        return todo


class CompleteTodoMutation(FieldDefinition):
    def type(self):
        return "Todo"

    def args(self):
        return {"id": {"type": "ID", "rules": ["required", "todo_exists"]}}

    def resolve(self, root, args, context=None, info=None):
        todo = TODOS[int(self.global_id.decode_id(args["id"]))]
        todo["done"] = True
        return todo


container.graphql.object_type(
    "Todo",
    {"id": container.make(TodoIdField), "title": Field(NonNull(String)), "done": Field(NonNull(Boolean))},
)
container.graphql.add_query("todos", container.make(TodosQuery, description="List todos"))
container.graphql.add_mutation("createTodo", container.make(CreateTodoMutation))
container.graphql.add_mutation("completeTodo", container.make(CompleteTodoMutation))


####################
# Starlette Server #
####################

setup_logging("debug")

graphql_route = get_graphql_route(gql_schema=container.graphql.build_schema(), container=container, path="/")
graphiql_route = get_graphiql_route(graphiql_path="/graphiql", graphql_path="/")

APP = Starlette(routes=[graphql_route, graphiql_route], exception_handlers={HTTPException: http_exception})


if __name__ == "__main__":
    uvicorn.run(APP, host="0.0.0.0", port=5084)
