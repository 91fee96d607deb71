from codegraph_comments.cli import main

main()
