"""Feature routers (users / tasks / reports), composed by http.router."""
